"""
Inventory business layer.

Organized into:
- catalog/ - product, supplier and warehouse managers
- stock/ - stock level adjustments
- ordering/ - order factory, state machine and lifecycle context
"""
