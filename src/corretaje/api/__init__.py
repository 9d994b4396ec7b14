"""
FastAPI REST API for the Corretaje listings service

Provides REST endpoints for the public site and the agents' back office:
- Property listings (filtered by offering type, category, district, price, rooms)
- Contact inquiries and their workflow state
- Listing and inquiry statistics
- Health checks
"""
