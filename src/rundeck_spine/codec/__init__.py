"""
Markup codec for job documents.

- ``schema``      : declarative field mapping and the generic walker
- ``scalars``     : comma-joined choices, attribute-wrapped argument line
- ``config_map``  : sorted key/value entries under a wrapper element
- ``documents``   : job schemas and ``jobs`` / ``joblist`` documents
"""
