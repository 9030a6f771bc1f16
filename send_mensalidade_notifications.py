import argparse
import logging
from datetime import date, datetime

from dotenv import load_dotenv

load_dotenv()

from amesp import models  # noqa: F401
from amesp.database import SessionLocal
from amesp.notificacoes import enviar_notificacao_mensalidade

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def main():
    """
    Executa o lembrete de mensalidade do dia (ou da data passada em --date),
    a mesma regra do endpoint de cron.
    """
    parser = argparse.ArgumentParser(description='Notificações de mensalidade')
    parser.add_argument('--date', help='Data de referência no formato YYYY-MM-DD (padrão: hoje)')
    args = parser.parse_args()

    if args.date:
        try:
            data_ref = datetime.strptime(args.date, "%Y-%m-%d").date()
        except ValueError:
            logging.error("Data inválida. Use o formato YYYY-MM-DD.")
            return 1
    else:
        data_ref = date.today()

    db = SessionLocal()
    try:
        resultado = enviar_notificacao_mensalidade(db, data_ref)
    finally:
        db.close()

    if resultado["sent"]:
        logging.info(f"{data_ref.isoformat()}: {resultado['message']}")
    else:
        logging.info(
            f"{data_ref.isoformat()}: nada a enviar (dia {resultado['day']}, "
            f"últimos dias {resultado['last_three_days']})"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
