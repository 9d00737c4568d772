"""
Jobly: companies, jobs and users behind a token-authenticated JSON API.
"""
