"""
Processing pipelines built on top of the model layer.
"""
