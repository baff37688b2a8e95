"""
auth — User authentication module.

Provides:
  • Signed bearer token creation & verification
  • Password hashing (bcrypt, work factor 10)
  • Signup / Login / Profile API routes
  • ``get_current_user`` / ``get_current_user_id`` FastAPI dependencies
"""
