"""Effects and the registry that names them.

Effects register lazily: the first registry lookup imports every shipped effect.
"""
