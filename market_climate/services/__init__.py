"""Services composing the pipeline with data loading."""
