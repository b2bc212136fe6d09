"""HTTP server: FastAPI app, request/response models and the Wikipedia proxy.

RULES:
- The app is importable without side effects beyond building the FastAPI object
- Outbound HTTP goes through WikipediaClient only
"""
