import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "local"
os.environ.setdefault("LOG_LEVEL", "WARNING")
for _name in ("AUTH_USERNAME", "AUTH_PASSWORD", "AUTH_PASSWORD_HASH", "AUTH_PASSWORD_SALT"):
    os.environ.pop(_name, None)
