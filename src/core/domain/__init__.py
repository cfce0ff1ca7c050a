"""Modelos y errores del dominio.

Por qué:
- Aquí viven los valores puros y estrictos (Pydantic v2): matriz, coordenada,
  especificación de contraseña.
- El dominio no conoce HTTP, CLI ni procesos del sistema operativo.
"""
