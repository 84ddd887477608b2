# Routes package init
"""
SheetStore Backend — API Routes Package
=========================================

Route Inventory:
    - collection.py: POST   /api/setCollection
    - sheets.py:     POST   /api/addSheet
                     GET    /api/getSheets
                     DELETE /api/deleteSheet
    - tables.py:     GET    /api/getTable
                     POST   /api/saveTable
    - health.py:     GET    /          (liveness text)
                     GET    /health    (database check)

Routes stay thin: pull values out of the request, call a service, return
its response model. Business rules live in app/services.
"""
