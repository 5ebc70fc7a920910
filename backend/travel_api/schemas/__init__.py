"""
Travel API Backend — Pydantic Request/Response Schemas
=======================================================

Request models accept the camelCase keys the mobile client sends
(`userId`, `placeId`, ...) and expose snake_case attributes to services.
Response models mirror the column names of the rows they describe.
"""
