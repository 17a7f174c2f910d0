"""
Configuration module for the application.
All configuration values are read from environment variables,
with development-friendly defaults.
"""
import os
import secrets
import warnings


def _env_bool(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    return int(raw) if raw else default


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        # Flask Configuration
        self.SECRET_KEY: str = os.getenv("SECRET_KEY", "")
        self.FLASK_ENV: str = os.getenv("FLASK_ENV", "")
        self.FLASK_DEBUG: bool = _env_bool("FLASK_DEBUG")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Generate a development SECRET_KEY if not set and in development mode
        if not self.SECRET_KEY and self.FLASK_ENV != "production":
            self.SECRET_KEY = secrets.token_urlsafe(32)
            warnings.warn(
                "SECRET_KEY not set. Generated a temporary key for development. "
                "Set SECRET_KEY in your .env file for production!",
                UserWarning
            )

        # Database Configuration
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "")
        self.DB_USER: str = os.getenv("DB_USER", "")
        self.DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
        self.DB_HOST: str = os.getenv("DB_HOST", "")
        self.DB_PORT: str = os.getenv("DB_PORT", "3306")
        self.DB_NAME: str = os.getenv("DB_NAME", "factify")

        # Token Configuration
        self.JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "") or self.SECRET_KEY
        self.JWT_ISSUER: str = os.getenv("JWT_ISSUER", "factify-api")
        self.JWT_AUDIENCE: str = os.getenv("JWT_AUDIENCE", "factify-client")
        self.JWT_EXPIRES_MINUTES: int = _env_int("JWT_EXPIRES_MINUTES", 60)
        self.JWT_LEEWAY_SECONDS: int = _env_int("JWT_LEEWAY_SECONDS", 30)

        # Password hashing
        self.BCRYPT_ROUNDS: int = _env_int("BCRYPT_ROUNDS", 12)

        # Account Validation
        self.MIN_PASSWORD_LENGTH: int = _env_int("MIN_PASSWORD_LENGTH", 8)
        self.USERNAME_MIN_LENGTH: int = _env_int("USERNAME_MIN_LENGTH", 3)
        self.USERNAME_MAX_LENGTH: int = _env_int("USERNAME_MAX_LENGTH", 20)

        # Cross-origin access for the single-page client
        cors_origins = os.getenv("CORS_ORIGINS", "*")
        self.CORS_ORIGINS: list[str] = [o.strip() for o in cors_origins.split(",") if o.strip()]

        # Seed a public demo quiz into an empty database
        self.SEED_DEMO_QUIZ: bool = _env_bool("SEED_DEMO_QUIZ", "true")

        # Session Configuration
        self.SESSION_COOKIE_SECURE: bool = _env_bool("SESSION_COOKIE_SECURE")

        # SQLAlchemy Configuration
        self.SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
        self.SQLALCHEMY_ECHO: bool = _env_bool("SQLALCHEMY_ECHO")

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construct database URI from environment variables."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            return (
                f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"
            )
        return "sqlite:///factify.db"

    def validate(self) -> None:
        """
        Validate required configuration values.
        Only enforces SECRET_KEY in production environment.
        """
        if not self.SECRET_KEY:
            if self.FLASK_ENV == "production":
                raise ValueError(
                    "SECRET_KEY environment variable is required in production. "
                    "Set it in your .env file or environment variables."
                )

    def to_flask(self) -> dict:
        """Mapping of values copied into ``app.config``."""
        return {
            "SECRET_KEY": self.SECRET_KEY,
            "LOG_LEVEL": self.LOG_LEVEL,
            "SQLALCHEMY_DATABASE_URI": self.SQLALCHEMY_DATABASE_URI,
            "SQLALCHEMY_TRACK_MODIFICATIONS": self.SQLALCHEMY_TRACK_MODIFICATIONS,
            "SQLALCHEMY_ECHO": self.SQLALCHEMY_ECHO,
            "JWT_SECRET_KEY": self.JWT_SECRET_KEY,
            "JWT_ISSUER": self.JWT_ISSUER,
            "JWT_AUDIENCE": self.JWT_AUDIENCE,
            "JWT_EXPIRES_MINUTES": self.JWT_EXPIRES_MINUTES,
            "JWT_LEEWAY_SECONDS": self.JWT_LEEWAY_SECONDS,
            "BCRYPT_ROUNDS": self.BCRYPT_ROUNDS,
            "MIN_PASSWORD_LENGTH": self.MIN_PASSWORD_LENGTH,
            "USERNAME_MIN_LENGTH": self.USERNAME_MIN_LENGTH,
            "USERNAME_MAX_LENGTH": self.USERNAME_MAX_LENGTH,
            "CORS_ORIGINS": self.CORS_ORIGINS,
            "SEED_DEMO_QUIZ": self.SEED_DEMO_QUIZ,
            "SESSION_COOKIE_SECURE": self.SESSION_COOKIE_SECURE,
        }
