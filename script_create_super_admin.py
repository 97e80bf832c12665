import argparse
import os
import sys
from pathlib import Path

# Garante import do app/ a partir da raiz do projeto.
PROJECT_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(PROJECT_ROOT))

from app.config import get_settings  # noqa: E402
from app.db.session import get_session_context  # noqa: E402
from app.logging_config import setup_logging  # noqa: E402
from app.services.account_service import create_super_admin  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Cria a conta super_admin (idempotente).")
    parser.add_argument("--email", default=os.getenv("SUPER_ADMIN_EMAIL"), help="Padrão: SUPER_ADMIN_EMAIL")
    parser.add_argument("--password", default=os.getenv("SUPER_ADMIN_PASSWORD"), help="Padrão: SUPER_ADMIN_PASSWORD")
    parser.add_argument("--business-name", default=os.getenv("SUPER_ADMIN_NAME", "Fittingz Admin"))
    args = parser.parse_args()

    setup_logging(get_settings().log_level)

    if not args.email or not args.password:
        print("ERRO: informe --email/--password ou SUPER_ADMIN_EMAIL/SUPER_ADMIN_PASSWORD")
        return 1

    with get_session_context() as session:
        account, created = create_super_admin(
            session,
            email=args.email,
            password=args.password,
            business_name=args.business_name,
        )

    if created:
        print(f"OK: super admin criado ({account.email}, id={account.id})")
    else:
        print(f"OK: super admin já existia ({account.email}), nada alterado")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
