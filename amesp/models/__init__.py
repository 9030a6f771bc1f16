# Importa todos os modelos para o SQLAlchemy registrar os relacionamentos
from amesp.models import usuario, maricultor, pagamento, reset_token, push_subscription, conteudo, documento  # noqa: F401
