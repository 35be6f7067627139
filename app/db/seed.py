"""
➡️ But : Remplir une base vide à partir d'un fichier YAML (données de démo).

Clés YAML :
  todos:       [{title, description, done?}]
  categories:  [{name, todos: [titres de todos]}]

Chaque section est idempotente : si la table contient déjà des lignes, on n'insère rien.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from sqlmodel import Session, select

from app.db.models.todos import Todo
from app.db.models.categories import Category

logger = logging.getLogger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Seed Todos
# -----------------------------
def seed_todos(session: Session, data: Dict[str, Any]) -> int:
    if session.exec(select(Todo)).first():
        logger.info("ℹ️ Les todos existent déjà, aucune insertion effectuée.")
        return 0
    todos: List[Dict[str, Any]] = data.get("todos", [])
    if not todos:
        logger.warning("⚠️ Aucun todo dans le YAML (clé 'todos').")
        return 0

    session.add_all([
        Todo(
            title=t["title"],
            description=t.get("description") or t["title"],
            done=bool(t.get("done", False)),
        )
        for t in todos
    ])
    session.commit()
    logger.info("✅ %s todos insérés.", len(todos))
    return len(todos)


# -----------------------------
# Seed Categories (+ liens vers les todos)
# -----------------------------
def seed_categories(session: Session, data: Dict[str, Any]) -> int:
    if session.exec(select(Category)).first():
        logger.info("ℹ️ Les catégories existent déjà, aucune insertion effectuée.")
        return 0
    categories: List[Dict[str, Any]] = data.get("categories", [])
    if not categories:
        logger.info("ℹ️ Aucune catégorie dans le YAML (clé 'categories').")
        return 0

    title_to_todo = {t.title: t for t in session.exec(select(Todo)).all()}

    objs: List[Category] = []
    for cat in categories:
        todos = []
        for title in cat.get("todos", []):
            todo = title_to_todo.get(title)
            if not todo:
                raise ValueError(
                    f"Todo '{title}' introuvable en DB pour la catégorie '{cat.get('name')}'. "
                    "As-tu bien seed les todos avant les catégories ?"
                )
            todos.append(todo)
        objs.append(Category(name=cat["name"], todos=todos))
    session.add_all(objs)
    session.commit()
    logger.info("✅ %s catégories insérées.", len(objs))
    return len(objs)


def seed_all(session: Session, seed_path: str | Path) -> None:
    data = load_seed_yaml(seed_path)
    seed_todos(session, data)
    seed_categories(session, data)
