"""Search adapter layer — Pluggable connectors for catalog search backends.

Built-in adapters:
  - elasticsearch: Elasticsearch / OpenSearch metadata index over HTTP

Implement ``SearchAdapter`` to publish another backend as a DCAT catalog.
"""
