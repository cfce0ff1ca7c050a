"""Core: dominio, servicios y configuración (sin HTTP ni procesos del SO)."""
