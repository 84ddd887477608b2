# Models package init
"""
SheetStore Backend — ORM Models
=================================

    - sheet.py: SheetMetadata (sheet registry) and SheetTable (saved grids)
"""
