"""Servicios puros del Core."""
