"""
HTTP routers, all mounted under /api:

- auth: /api/auth/* (register, login, me)
- store: /api/store/* (catalog, favorites, reviews)
- admin: /api/admin/* (site settings, admin preferences)
- public: /api/public/*, /api/health
"""
