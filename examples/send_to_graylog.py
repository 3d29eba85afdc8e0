"""Minimal example sending a few records to a local Graylog UDP input."""

from __future__ import annotations

import time

import podgelf


def main() -> None:
    podgelf.configure(
        {
            "host": "localhost",
            "port": 12201,
            "facility": "podgelf-demo",
            "custom_fields": {"_env": "dev"},
            "append_category": "logger",
            "diagnostics": "stderr",
        }
    )

    logger = podgelf.get_logger("examples.orders")
    for order_id in range(1, 4):
        logger.info(podgelf.gelf_fields(_order_id=order_id), "processed order %s", order_id)
        time.sleep(0.1)

    try:
        raise ValueError("payment declined")
    except ValueError:
        logger.exception("order failed")

    # datagrams still being compressed when the socket closes are dropped
    time.sleep(0.2)
    podgelf.shutdown(lambda: print("socket closed"))


if __name__ == "__main__":
    main()
