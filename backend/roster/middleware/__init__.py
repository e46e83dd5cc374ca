# Middleware package init
"""
Employee Roster API: Middleware Package
=========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging measures the full handling time and final status
    3. CORS handles browser preflight for the docs UI and other origins
"""
