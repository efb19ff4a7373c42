"""Business logic layer for files app.

This package contains all business logic for file nodes:
- Upload of files, images and folders into the hierarchy
- Listing, lookup and visibility changes
- The owner-or-public access policy

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).

Reference: https://github.com/dry-python
for decoupling business logic from Django views.
"""
