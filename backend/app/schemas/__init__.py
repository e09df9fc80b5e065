"""
Pydantic schemas for Learnly LMS request and response bodies.

- auth: signup, login and user payloads
- course: course catalogue and instructor course payloads
- lesson: lesson content payloads
- progress: enrollment, completion and dashboard payloads
"""
