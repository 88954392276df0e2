"""
NGO Site Backend - Services Layer
=================================

What:  Business logic between routes (HTTP) and storage (records, files).

Service Inventory:
    - LocalAssetStore:  member images on disk, unique names, public URLs
    - RecordStore:      CRUD contract; SqlRecordStore / JsonRecordStore backends
    - upload_intake:    member form parsing (text fields + one image)
    - MemberService:    member lifecycle with image reconciliation
    - EventService:     event CRUD
"""
