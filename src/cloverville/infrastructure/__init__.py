"""Infrastructure layer — document model, templates, data sources.

This layer depends on stdlib and third-party libs (markupsafe, Jinja2,
httpx, anyio).  It must never import from services, commands, or output.
"""
