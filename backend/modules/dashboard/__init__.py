# backend/modules/dashboard/__init__.py

"""
Dashboard Module - Role-scoped delivery analytics

Computes the statistics and trend series shown on the dashboard landing
page. The shape of the answer depends on the viewer's role and tenant
scope:

- Platform staff see platform-wide totals, optionally narrowed to one operator
- Operator admins and dispatchers see their operator's orders and revenue
- Drivers see orders on the vehicles assigned to them
- Customers see their own orders

Components:
- Services: time window, scope gate, aggregate queries, trend series,
  role strategies and the dashboard orchestrator
- Schemas: Pydantic request/response models
- Routers: the GET /dashboard endpoint
"""
