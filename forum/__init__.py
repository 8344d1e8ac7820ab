# forum/__init__.py
"""
Backend del foro: usuarios, temas, comentarios y likes sobre FastAPI +
SQLAlchemy async.

La app se construye con `forum.main.create_app()`; `forum.main:app` es la
instancia que usa uvicorn.
"""
