"""
Services Package

Business logic shared by the GraphQL resolvers:
- security: Token issuance/verification and password hashing
- repository: Persistence adapter for users, authors and books
"""
