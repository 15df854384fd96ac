"""
Generation of compose files from stacks and custom service selections.
"""
