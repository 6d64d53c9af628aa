"""
Pipeline functions.

Stateless orchestration logic that combines services for the routers.
"""
