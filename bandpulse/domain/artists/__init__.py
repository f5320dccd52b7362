"""
Artists bounded context: domain layer.

- Artist identity and presentation data
- Follow relationships between users and artists
"""
