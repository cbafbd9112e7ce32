"""Tax forms: the form contract and the federal, state and local returns."""
