"""
Helper de base de datos: creación del esquema y gestión de versiones.

La versión del esquema se guarda en ``PRAGMA user_version`` de SQLite.
"""
import logging
import threading
from sqlalchemy import Column, Integer, MetaData, Table, Text, create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import NullPool
from sqlalchemy.schema import CreateTable

from .contract import PetEntry
from .exceptions import DatabaseVersionError

logger = logging.getLogger(__name__)

DATABASE_NAME = "shelter.db"

# Si cambia el esquema hay que incrementar la versión
DATABASE_VERSION = 1

metadata = MetaData()

pets_table = Table(
    PetEntry.TABLE_NAME,
    metadata,
    Column(PetEntry._ID, Integer, primary_key=True, autoincrement=True),
    Column(PetEntry.COLUMN_PET_NAME, Text, nullable=False),
    Column(PetEntry.COLUMN_PET_BREED, Text),
    Column(PetEntry.COLUMN_PET_GENDER, Integer, nullable=False),
    Column(PetEntry.COLUMN_PET_WEIGHT, Integer, nullable=False, server_default=text("0")),
    sqlite_autoincrement=True,
)


class PetDbHelper:
    """
    Abre (y crea si hace falta) la base de datos de mascotas.

    El engine se construye en el primer uso. Sin pool de conexiones: cada
    operación abre el fichero y lo libera al terminar.
    """

    def __init__(self, path: str, version: int = DATABASE_VERSION):
        self.path = path
        self.version = version
        self._engine: Engine | None = None
        self._lock = threading.Lock()

    @property
    def engine(self) -> Engine:
        # _open debe ejecutarse una sola vez aunque lleguen varias peticiones a la vez
        with self._lock:
            if self._engine is None:
                engine = create_engine(
                    f"sqlite:///{self.path}",
                    connect_args={"check_same_thread": False},
                    poolclass=NullPool,
                )
                self._open(engine)
                self._engine = engine
        return self._engine

    def _open(self, engine: Engine) -> None:
        with engine.begin() as conn:
            current = conn.exec_driver_sql("PRAGMA user_version").scalar() or 0
            if current == self.version:
                return
            if current > self.version:
                raise DatabaseVersionError(
                    f"Can't downgrade database from version {current} to {self.version}"
                )
            if current == 0:
                self.on_create(conn)
            else:
                self.on_upgrade(conn, current, self.version)
            conn.exec_driver_sql(f"PRAGMA user_version = {int(self.version)}")

    def on_create(self, conn: Connection) -> None:
        metadata.create_all(conn)
        logger.debug("SQL-CREATE statement:\n%s", CreateTable(pets_table).compile(conn))

    def on_upgrade(self, conn: Connection, old_version: int, new_version: int) -> None:
        # Seguimos en la versión 1: no hay nada que migrar
        logger.info("Upgrading database %s from version %s to %s", self.path, old_version, new_version)

    def close(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
