"""엔티티 알림 헤더 유틸리티.

Entity alert header utility.
Builds the X-<app>-alert / X-<app>-params header pair that tells the client
which entity changed, e.g. "A new image is created with identifier <id>".
"""


def alert_headers(app_name: str, message: str, param: str) -> dict[str, str]:
    return {
        f"X-{app_name}-alert": message,
        f"X-{app_name}-params": param,
    }


def entity_creation_alert(app_name: str, entity_name: str, entity_id: str) -> dict[str, str]:
    """생성 알림 헤더 (Creation alert headers)."""
    return alert_headers(app_name, f"A new {entity_name} is created with identifier {entity_id}", entity_id)


def entity_update_alert(app_name: str, entity_name: str, entity_id: str) -> dict[str, str]:
    """수정 알림 헤더 (Update alert headers)."""
    return alert_headers(app_name, f"A {entity_name} is updated with identifier {entity_id}", entity_id)


def entity_deletion_alert(app_name: str, entity_name: str, entity_id: str) -> dict[str, str]:
    """삭제 알림 헤더 (Deletion alert headers)."""
    return alert_headers(app_name, f"A {entity_name} is deleted with identifier {entity_id}", entity_id)
