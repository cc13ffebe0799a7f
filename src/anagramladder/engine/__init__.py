"""Word-graph engine: signature graph, scoring, suggestions and ladder search."""
