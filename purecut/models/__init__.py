"""
Model access layer: provider clients, task configuration and prompts.
"""
