"""Flask extensions and database setup."""
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy

# SQLAlchemy instance
db = SQLAlchemy()

# JWT - establishes the caller identity for admin routes
jwt = JWTManager()
