"""Intent classification.

The intent layer turns a user question plus the model's query description into a validated
`Intent`, which the table layer converts into a deterministic row predicate.
"""
