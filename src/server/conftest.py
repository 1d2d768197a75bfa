# -*- coding: utf-8 -*-
"""
测试公共夹具

- `test_db_session`：基于内存 SQLite 的独立会话，每个用例重新建表
- `client`：挂载了测试会话的 FastAPI `TestClient`
"""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.server.auth import models as auth_models  # noqa: F401
from src.server.database import Base, get_db
from src.server.items import models as item_models  # noqa: F401


@pytest.fixture()
def test_db_session() -> Iterator[Session]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture()
def client(test_db_session: Session) -> Iterator[TestClient]:
    from src.server.app import create_app

    app = create_app()
    app.dependency_overrides[get_db] = lambda: test_db_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
