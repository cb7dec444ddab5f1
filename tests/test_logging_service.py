import logging

from appearance.services.logging_service import LoggingService


def test_captures_appearance_records_only():
    svc = LoggingService(capacity=10)
    svc.attach()
    try:
        logging.getLogger("appearance.services.theme_resolver").debug("override %s", "dark")
        logging.getLogger("elsewhere").warning("not ours")
        entries = svc.recent()
        assert [e.message for e in entries] == ["override dark"]
        assert entries[0].level == "DEBUG"
    finally:
        svc.detach()


def test_ring_buffer_capacity_and_filter():
    svc = LoggingService(capacity=3)
    svc.attach()
    log = logging.getLogger("appearance.test")
    try:
        for i in range(5):
            log.info("msg %d", i)
        log.warning("careful")
    finally:
        svc.detach()
    assert [e.message for e in svc.recent()] == ["msg 3", "msg 4", "careful"]
    assert [e.message for e in svc.filter(level="WARNING")] == ["careful"]
    assert svc.recent(limit=1)[0].message == "careful"
    assert svc.filter(name_contains="nope") == []
    svc.clear()
    assert svc.recent() == []


def test_detach_restores_logger_level():
    logger = logging.getLogger("appearance")
    before = logger.level
    svc = LoggingService()
    svc.attach()
    svc.attach()
    assert logger.level == logging.DEBUG
    svc.detach()
    svc.detach()
    assert logger.level == before
    logging.getLogger("appearance.x").error("after detach")
    assert svc.recent() == []


def test_overlapping_services_share_logger_level():
    logger = logging.getLogger("appearance.overlap")
    logger.setLevel(logging.NOTSET)
    first = LoggingService(logger_name="appearance.overlap")
    second = LoggingService(logger_name="appearance.overlap")
    first.attach()
    second.attach()
    first.detach()
    # second is still capturing debug transitions
    assert logger.level == logging.DEBUG
    logger.debug("still captured")
    assert [e.message for e in second.recent()] == ["still captured"]
    second.detach()
    assert logger.level == logging.NOTSET
