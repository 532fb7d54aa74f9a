"""socialnet: social-networking JSON API and client state store.

Run the server with ``uvicorn --factory socialnet.app:create_app``.
``uvicorn socialnet.app:app`` also works; the app is built on first access.
"""
