# Configuration settings read from the environment

import os
import ssl


class Settings:
    """Analyzer settings"""

    LOG_LEVEL: str = os.getenv("TLS_COMPAT_LOG_LEVEL", "WARNING").upper()

    # Empty means: derive from what the local ssl module supports
    TLS_VERSION: str = os.getenv("TLS_COMPAT_TLS_VERSION", "")

    STORE_PASSWORD: str = os.getenv("TLS_COMPAT_STORE_PASSWORD", "")

    @property
    def default_tls_version(self) -> str:
        if self.TLS_VERSION:
            return self.TLS_VERSION
        return "TLSv1.3" if ssl.HAS_TLSv1_3 else "TLSv1.2"


# Global settings instance
settings = Settings()
