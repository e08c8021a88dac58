"""
Pydantic schemas for API request and response validation.

All curation inputs and outputs use frozen Pydantic models with explicit types.
"""
