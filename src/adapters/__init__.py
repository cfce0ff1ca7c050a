"""Adaptadores de I/O: HTTP (página de la matriz) y marcadores VPN del SO."""
