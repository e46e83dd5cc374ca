# Services package init
"""
Employee Roster API: Services Layer
=====================================

What:  Query mapping between routes (HTTP) and the storage client.
How:   Services accept a session and request models, run one storage call,
       and return response models or raise application exceptions.

Service Inventory:
    - EmployeeService: list / find / create / update / delete employees
"""
