# mytube/__init__.py
"""
Capa de datos y acciones de MyTube.

Persiste usuarios, videos, posts, mensajes y notificaciones en archivos
JSON planos (o en el almacén local sqlite) y los expone vía FastAPI.
"""
