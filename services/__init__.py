"""
services/ - Business Logic Layer
================================
Services orchestrate repository calls into use cases. They validate input,
never build SQL, and let repository errors propagate to the boundary layer.
"""
