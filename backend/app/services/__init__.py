"""
Business logic for Learnly LMS.

- access: owner-or-enrolled course authorization
- courses: course catalogue and course management
- lessons: lesson delivery and lesson management
- enrollment: enrollment lifecycle
- progress: lesson completion toggle and progress aggregation
"""
