"""
Domain layer - task entities, value objects, reference holders and iteration
patterns. Independent of logging and configuration concerns.
"""
