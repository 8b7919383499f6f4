"""测试夹具：为 pytest 提供数据库、存储上下文、目录树与客户端的共享配置。"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

# 在导入应用之前把数据目录与日志目录指向临时位置
_TEST_HOME = tempfile.mkdtemp(prefix="crucible_test_")
os.environ.setdefault("DATA_DIR", os.path.join(_TEST_HOME, "data"))
os.environ.setdefault("LOG_DIR", os.path.join(_TEST_HOME, "log"))
os.environ.setdefault("EXTRA_TAG_PROVIDER", "none")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.packages.crucible.db import session as db_session
from app.packages.crucible.db.init_db import init_db
from app.packages.crucible.db.session import StoreContext, build_engine
from app.packages.crucible.models.base import Base
from app.main import app

TEST_DB_PATH = os.path.join(_TEST_HOME, "test.db")
TEST_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database() -> Generator[None, None, None]:
    """创建隔离的 SQLite 测试数据库，并在会话结束后清理。"""
    engine = build_engine(TEST_DATABASE_URL)
    db_session.engine = engine
    db_session.SessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )

    init_db()
    yield

    engine.dispose()
    shutil.rmtree(_TEST_HOME, ignore_errors=True)


@pytest.fixture()
def store(tmp_path: Path) -> Generator[StoreContext, None, None]:
    """每个用例独立的存储上下文，背后是一个全新的 SQLite 文件。"""
    engine = build_engine(f"sqlite:///{tmp_path / 'tags.db'}")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)()
    context = StoreContext(lock_timeout=1.0)
    context.initialize(session)
    yield context
    session.close()
    engine.dispose()


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """构建一棵固定的目录树，返回解析后的根路径。

    project/
      a.txt, b.txt
      docs/readme.md
      src/main.py
      src/lib/util.py
      src/lib/deep/leaf.txt
    """
    root = tmp_path / "outer" / "project"
    (root / "docs").mkdir(parents=True)
    (root / "src" / "lib" / "deep").mkdir(parents=True)
    (root / "a.txt").write_text("alpha", encoding="utf-8")
    (root / "b.txt").write_text("bravo!", encoding="utf-8")
    (root / "docs" / "readme.md").write_text("# docs", encoding="utf-8")
    (root / "src" / "main.py").write_text("print('hi')\n", encoding="utf-8")
    (root / "src" / "lib" / "util.py").write_text("", encoding="utf-8")
    (root / "src" / "lib" / "deep" / "leaf.txt").write_text("leaf", encoding="utf-8")
    return root.resolve()


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """构建 FastAPI TestClient，启动事件会把共享连接指向测试数据库。"""
    with TestClient(app) as test_client:
        yield test_client
