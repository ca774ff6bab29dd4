"""
Services Layer
Read-side query services used primarily by the routes.

Services should:
- Not modify data or apply business rules
- Read from multiple data models to aggregate information
- Be stateless
"""
