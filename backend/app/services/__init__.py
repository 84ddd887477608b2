# Services package init
"""
SheetStore Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).

Service Inventory:
    - CollectionService: resolves the sheet targeted by table requests
    - SheetService: sheet name registry (add, list, delete)
    - TableService: per-sheet grid lookup and full-overwrite upsert

Services receive the request's AsyncSession and never commit; the session
dependency owns the transaction.
"""
