# amesp/routes/ordenacao.py
# Funções comuns às listas ordenáveis do site (notícias, eventos, projetos...)
from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session


def proxima_ordem(db: Session, model) -> int:
    maior = db.query(func.max(model.display_order)).scalar()
    return 0 if maior is None else maior + 1


def _inteiro(valor) -> bool:
    return isinstance(valor, int) and not isinstance(valor, bool)


def aplicar_reordenacao(db: Session, model, updates) -> int:
    """
    Aplica [{id, display_order}] e retorna quantos itens foram alterados.
    Entradas com id ou ordem não inteiros são ignoradas.
    """
    if not updates:
        raise HTTPException(status_code=400, detail="Nenhuma alteração de ordem informada")

    alterados = 0
    for item in updates:
        item_id = item.get("id")
        ordem = item.get("display_order")
        if not _inteiro(item_id) or not _inteiro(ordem):
            continue
        alterados += db.query(model).filter(model.id == item_id).update(
            {model.display_order: ordem}, synchronize_session=False
        )
    db.commit()
    return alterados


def get_or_404(db: Session, model, item_id: int, detail: str):
    item = db.query(model).filter(model.id == item_id).first()
    if item is None:
        raise HTTPException(status_code=404, detail=detail)
    return item


def alternar_publicacao(db: Session, item):
    item.published = not item.published
    db.commit()
    db.refresh(item)
    return item


def sincronizar_itens(db: Session, model, itens):
    """
    Substitui os itens de uma seção pela lista enviada: atualiza os que têm id
    conhecido, cria os novos e apaga os que ficaram de fora.
    A ordem é a posição na lista.
    """
    existentes = {item.id: item for item in db.query(model).all()}
    mantidos = set()
    for indice, item in enumerate(itens):
        db_item = existentes.get(item.id) if item.id is not None else None
        if db_item is None:
            db_item = model()
            db.add(db_item)
        else:
            mantidos.add(db_item.id)
        db_item.title = item.title
        db_item.description = item.description
        db_item.icon_key = item.icon_key
        db_item.display_order = indice
    for item_id, db_item in existentes.items():
        if item_id not in mantidos:
            db.delete(db_item)
