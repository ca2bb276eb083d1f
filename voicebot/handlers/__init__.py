"""
Handlers module for the chat HTTP API.

Key components:
- chat_handlers: The process-text and process-audio pipelines. Both validate the
  request, call the injected services, and map failures onto 400/500 JSON
  error bodies of the form ``{"error": str}``.
"""
