# Routes package init
"""
Employee Roster API: API Routes Package
=========================================

Route Inventory:
    - employees.py:  GET    /employees
                     GET    /employees/{employee_id}
                     POST   /employees
                     PATCH  /employees/{employee_id}
                     DELETE /employees/{employee_id}
    - health.py:     GET    /
                     GET    /health

Routes stay thin: read the request, call the service, return the model.
"""
