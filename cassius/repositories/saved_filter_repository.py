"""
Repositorio de filtros guardados (Redis).

Un hash por organización: `{SAVED_FILTERS_KEY_PREFIX}:{organisation_id}`,
campo = id del filtro, valor = SavedFilter en JSON (claves camelCase).
Ninguna operación lee fuera del hash de la organización.
"""
import logging
from typing import List, Optional

from pydantic import ValidationError
from redis import asyncio as aioredis
from redis.exceptions import RedisError

from cassius.config import config
from cassius.exceptions import (
    InvalidFilterFormatError,
    StorageError,
    StorageUnavailableError,
)
from cassius.models.enums import SavedFilterPageType
from cassius.models.saved_filter import SavedFilter


class SavedFilterRepository:
    """
    Acceso a filtros guardados por organización.

    Sin reintentos: un fallo de Redis se propaga como StorageError y el
    cliente decide si vuelve a intentar.
    """

    def __init__(
        self,
        redis_client: Optional[aioredis.Redis],
        key_prefix: Optional[str] = None
    ):
        """
        Args:
            redis_client: Cliente de RedisRepository.get_client() (None si no conectado)
            key_prefix: Prefijo de claves (default: config.SAVED_FILTERS_KEY_PREFIX)
        """
        self.logger = logging.getLogger(__name__)
        self.redis = redis_client
        self.key_prefix = key_prefix or config.SAVED_FILTERS_KEY_PREFIX

    def _key(self, organisation_id: str) -> str:
        return f"{self.key_prefix}:{organisation_id}"

    def _require_client(self) -> aioredis.Redis:
        if self.redis is None:
            raise StorageUnavailableError("Redis client not connected")
        return self.redis

    def _parse(self, raw: str, filter_id: str) -> SavedFilter:
        try:
            return SavedFilter.model_validate_json(raw)
        except ValidationError as e:
            raise InvalidFilterFormatError(
                f"stored record is not a saved filter ({e.error_count()} errors)",
                filter_id
            ) from e

    async def list_by_page(
        self,
        organisation_id: str,
        page_type: SavedFilterPageType
    ) -> List[SavedFilter]:
        """
        Lista los filtros de una organización y página, más recientes primero.

        Los registros ilegibles se omiten (WARNING) para no bloquear el resto.

        Raises:
            StorageUnavailableError: Si Redis no está conectado
            StorageError: Si falla la lectura
        """
        client = self._require_client()
        try:
            records = await client.hgetall(self._key(organisation_id))
        except RedisError as e:
            self.logger.error(f"Error listando filtros de {organisation_id}: {e}")
            raise StorageError("charger", str(e)) from e

        saved_filters = []
        for filter_id, raw in records.items():
            try:
                saved_filter = self._parse(raw, filter_id)
            except InvalidFilterFormatError:
                self.logger.warning(f"Registro ilegible omitido: {self._key(organisation_id)} / {filter_id}")
                continue
            if saved_filter.page_type == page_type:
                saved_filters.append(saved_filter)

        saved_filters.sort(key=lambda sf: sf.created_at, reverse=True)
        return saved_filters

    async def create(self, saved_filter: SavedFilter) -> SavedFilter:
        """
        Persiste un filtro en el hash de su organización.

        Raises:
            StorageUnavailableError: Si Redis no está conectado
            StorageError: Si falla la escritura ("Impossible de sauvegarder le filtre.")
        """
        client = self._require_client()
        key = self._key(saved_filter.organisation_id)
        try:
            await client.hset(key, saved_filter.id, saved_filter.model_dump_json(by_alias=True))
        except RedisError as e:
            self.logger.error(f"Error guardando filtro {saved_filter.id} en {key}: {e}")
            raise StorageError("sauvegarder", str(e)) from e

        self.logger.info(f"Filtro guardado: {key} / {saved_filter.id} ('{saved_filter.name}')")
        return saved_filter

    async def get(self, organisation_id: str, filter_id: str) -> Optional[SavedFilter]:
        """
        Obtiene un filtro por ID dentro de la organización.

        Returns:
            SavedFilter, o None si no existe en esa organización

        Raises:
            InvalidFilterFormatError: Si el registro almacenado está corrupto
        """
        client = self._require_client()
        try:
            raw = await client.hget(self._key(organisation_id), filter_id)
        except RedisError as e:
            self.logger.error(f"Error leyendo filtro {filter_id}: {e}")
            raise StorageError("charger", str(e)) from e

        if raw is None:
            return None
        return self._parse(raw, filter_id)

    async def delete(self, organisation_id: str, filter_id: str) -> bool:
        """
        Elimina un filtro de la organización.

        Returns:
            True si existía y fue eliminado

        Raises:
            StorageError: Si falla la eliminación ("Impossible de supprimer le filtre.")
        """
        client = self._require_client()
        key = self._key(organisation_id)
        try:
            removed = await client.hdel(key, filter_id)
        except RedisError as e:
            self.logger.error(f"Error eliminando filtro {filter_id} de {key}: {e}")
            raise StorageError("supprimer", str(e)) from e

        if removed:
            self.logger.info(f"Filtro eliminado: {key} / {filter_id}")
        return bool(removed)
