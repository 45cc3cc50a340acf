"""Run the mail relay with uvicorn.

Equivalent to the ``mail-relay`` console script::

    python main.py
"""

from mail_relay.server import main


if __name__ == "__main__":
    main()
