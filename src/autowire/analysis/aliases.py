"""Register interface → implementation aliases on the container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from autowire.container import ContainerBuilder

logger = logging.getLogger(__name__)


@dataclass
class AliasReport:
    registered: int = 0
    already_aliased: int = 0


class AliasRegistrar:
    """First registration of an interface identifier wins."""

    def __init__(self, container: ContainerBuilder) -> None:
        self._container = container

    def register(
        self, interface_ids: list[str], service_id: str
    ) -> AliasReport:
        report = AliasReport()
        for interface_id in interface_ids:
            if self._container.has_alias(interface_id):
                report.already_aliased += 1
                continue
            self._container.set_alias(interface_id, service_id)
            logger.debug("Aliased %s -> %s", interface_id, service_id)
            report.registered += 1
        return report
