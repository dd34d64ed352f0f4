"""fxbehaviors.effects package.

IMPORTANT:
- Modules here are NOT auto-imported by scanning the folder.
- Shipped effects are registered explicitly via fxbehaviors.auto_load.register_all(),
  which fxbehaviors.registry calls lazily on first lookup.
"""
