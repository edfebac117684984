"""
Model generator tests: random subspaces, structured families and the tree catalog.
"""
