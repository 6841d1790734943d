"""Kafka log source backed by `confluent_kafka`.

The consumer subscribes to the configured topic and yields message values.
Offset commits are left to librdkafka (`enable.auto.commit`); partition EOF
events are ignored, every other broker error is raised.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from typing import Any

from confluent_kafka import Consumer, KafkaError, KafkaException

from punktransfers.core.config import StreamConfig
from punktransfers.core.interfaces import ILogSource


class KafkaLogSource(ILogSource):
    """Iterate raw log messages from a Kafka topic.

    Parameters
    ----------
    config : StreamConfig
        Broker, topic and group settings.
    idle_timeout_s : float | None
        Stop iterating after this many seconds without a message.
        None keeps consuming forever.
    consumer : Any
        Pre-built consumer (tests); built from `config` when omitted.
    """

    def __init__(
        self,
        config: StreamConfig,
        *,
        idle_timeout_s: float | None = None,
        consumer: Any = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.idle_timeout_s = idle_timeout_s
        self._log = logger or logging.getLogger("punktransfers.sources.kafka")
        self._consumer = consumer if consumer is not None else Consumer(config.consumer_properties())
        self._closed = False

    def __iter__(self) -> Iterator[bytes]:
        self._consumer.subscribe([self.config.topic])
        self._log.info(
            "kafka source subscribed: servers=%s topic=%s group=%s",
            self.config.bootstrap_servers,
            self.config.topic,
            self.config.group_id,
        )
        last_msg_at = time.monotonic()
        while not self._closed:
            msg = self._consumer.poll(self.config.poll_timeout_s)
            if msg is None:
                if self.idle_timeout_s is not None and time.monotonic() - last_msg_at >= self.idle_timeout_s:
                    self._log.info("kafka source idle for %.1fs, stopping", self.idle_timeout_s)
                    return
                continue
            err = msg.error()
            if err is not None:
                if err.code() == KafkaError._PARTITION_EOF:
                    continue
                raise KafkaException(err)
            last_msg_at = time.monotonic()
            value = msg.value()
            if value is not None:
                yield value

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._consumer.close()
