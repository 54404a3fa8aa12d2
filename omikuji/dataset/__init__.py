"""Fortune dataset ingestion: CSV text -> rows -> Fortune records."""
