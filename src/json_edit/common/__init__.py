"""
Building blocks shared by the handlers: paths, mutators, operations and results.
"""
