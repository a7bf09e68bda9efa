"""Storefront API.

A small REST service that manages users, products and orders, persisting each
resource as a JSON array in its own flat file.

High-level architecture
-----------------------

- ``storefront_api.core``:

  - Logging and optional Logfire monitoring.
  - ``JsonFileDatabase``, the read-whole-file / write-whole-file store.
  - Pydantic I/O models describing request payloads.

- ``storefront_api.server``:

  - The FastAPI application, its settings and routers.
  - Input validators and the JSON response envelope.
  - Exception handlers and request middleware.

- ``storefront_api.tools``:

  - A smoke test that drives a running server end to end.

Typical workflow
----------------

1. Start the server with ``python -m storefront_api.server``.
2. Create users and products.
3. Place orders referencing them, then move orders through their statuses
   (``pending`` -> ``confirmed`` -> ``shipped`` -> ``delivered``) or cancel
   them while still pending.
"""

__version__ = "1.0.0"
