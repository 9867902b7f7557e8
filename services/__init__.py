"""
services/ - Business Logic Layer
================================
The recurrence engine plus the services that feed it (intake of extracted
candidates) and consume it (month scheduling onto the board).
"""
