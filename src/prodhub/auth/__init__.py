"""Authentication and authorization.

Learn: a single authentication path. Users exchange email/password for a
signed JWT bearer token; every protected request presents it and gets a
CurrentIdentity, which handlers use to scope every query to its owner.
"""
