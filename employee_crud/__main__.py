"""
Sobe o servidor de desenvolvimento.

Uso:
  python -m employee_crud            # HOST/PORT do ambiente (default 127.0.0.1:3000)
"""
from __future__ import annotations

import uvicorn

from employee_crud.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "employee_crud.app_factory:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.app_env == "dev",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
