"""
Service layer: the table data service, the generic list editor and the
WebSocket session that drives it.
"""
