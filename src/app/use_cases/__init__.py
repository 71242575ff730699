"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, password management
- resources/: Upload, browsing, rating, deletion
- categories/: Category browsing
- admin/: Catalog and account administration

Import from subdirectories.
"""
