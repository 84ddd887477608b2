# Schemas package init
"""
SheetStore Backend — API Schemas
==================================

    - sheet.py: request/response models for the sheet CRUD contract
"""
