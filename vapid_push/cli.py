"""
Command line interface

Usage:
    # Create the private key pem plus public_key.txt / private_key.txt
    python -m vapid_push generate-keys --key vapid/prime256v1_key.pem

    # Print the public key browsers need for PushManager.subscribe()
    python -m vapid_push public-key

    # Print the Authorization header for an endpoint
    python -m vapid_push token https://updates.push.services.mozilla.com/wpush/v2/...

    # Send an (unencrypted) push message
    python -m vapid_push send https://fcm.googleapis.com/fcm/send/... --data "" --ttl 60

Defaults come from ``VAPIDPUSH_*`` environment variables, see vapid_push.configs.
"""

import argparse
import asyncio
import sys

from vapid_push.configs import configs
from vapid_push.core.dispatcher import PushDispatcher, get_endpoint, send_push
from vapid_push.core.keys import PublicKeyResolver, generate_private_key, write_raw_keys
from vapid_push.core.logger import setup_logging
from vapid_push.crypto import get_backend
from vapid_push.exceptions import PushRejected, VapidPushError
from vapid_push.models import KeyReference


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vapid_push", description="VAPID Web Push tools")
    parser.add_argument("--backend", choices=["native", "openssl"], help="Crypto backend")
    parser.add_argument("--log-level", default=None, help="Log level (default: VAPIDPUSH_LogLevel)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    gen_parser = subparsers.add_parser("generate-keys", help="Generate a VAPID key pair")
    gen_parser.add_argument("--key", "-k", default=None, help="Private key pem to create")
    gen_parser.add_argument("--force", action="store_true", help="Overwrite an existing key")

    pub_parser = subparsers.add_parser("public-key", help="Print the VAPID public key")
    pub_parser.add_argument("--key", "-k", default=None, help="Private key pem")

    token_parser = subparsers.add_parser("token", help="Print the Authorization header for an endpoint")
    token_parser.add_argument("endpoint", help="Push subscription endpoint")
    token_parser.add_argument("--sub", "-s", default=None, help="Contact (mailto:...)")
    token_parser.add_argument("--key", "-k", default=None, help="Private key pem")

    send_parser = subparsers.add_parser("send", help="Send a push message")
    send_parser.add_argument("endpoint", help="Push subscription endpoint")
    send_parser.add_argument("--data", "-d", default="", help="Message body")
    send_parser.add_argument("--sub", "-s", default=None, help="Contact (mailto:...)")
    send_parser.add_argument("--aud", "-a", default=None, help="Audience, defaults to the endpoint origin")
    send_parser.add_argument("--key", "-k", default=None, help="Private key pem")
    send_parser.add_argument("--timeout", "-t", type=float, default=None, help="Request timeout in seconds")
    send_parser.add_argument("--ttl", type=int, default=None, help="TTL header value")

    return parser


def _key(args: argparse.Namespace) -> KeyReference:
    return KeyReference.of(args.key or configs.Vapid.PrivateKeyPath)


def _claim(args: argparse.Namespace) -> dict[str, str]:
    claim = {"sub": args.sub or configs.Vapid.Subject}
    if getattr(args, "aud", None):
        claim["aud"] = args.aud
    return claim


async def run(args: argparse.Namespace) -> int:
    backend = get_backend(args.backend)

    if args.command == "generate-keys":
        key = generate_private_key(_key(args).path, overwrite=args.force)
        raw = await write_raw_keys(key, backend=backend)
        print(f"Private key: {key}")
        print(f"Public key:  {raw.public_key}")
        print("\nAdd to your .env file:")
        print(f"VAPIDPUSH_Vapid_PrivateKeyPath={key}")
        return 0

    if args.command == "public-key":
        print(await PublicKeyResolver(backend).resolve(_key(args)))
        return 0

    if args.command == "token":
        dispatcher = PushDispatcher(backend=backend)
        endpoint = get_endpoint({"endpoint": args.endpoint})
        headers = await dispatcher.build_headers(endpoint, _claim(args), _key(args))
        print(headers["Authorization"])
        return 0

    if args.command == "send":
        status = await send_push(
            {"endpoint": args.endpoint},
            args.data,
            _claim(args),
            _key(args),
            timeout=args.timeout,
            ttl=args.ttl,
            backend=backend,
        )
        print(status)
        return 0

    return 2


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 2

    setup_logging(args.log_level or configs.LogLevel)

    try:
        return asyncio.run(run(args))
    except PushRejected as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.body:
            print(e.body, file=sys.stderr)
        return 1
    except (VapidPushError, FileExistsError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
