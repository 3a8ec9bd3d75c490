"""
content/ — Ciclo de vida del contenido: drafts y artículos.

Módulos:
- models.py     → Dataclasses Draft y Article (+ serialización JSON)
- repository.py → load_all/save_all de las dos colecciones
- workflow.py   → Guardar draft, publicar, actualizar y borrar
- errors.py     → Excepciones del dominio
"""
