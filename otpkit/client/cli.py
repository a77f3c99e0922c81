import argparse
import logging
import sys

from otpkit.common.audit_logger import AuditLogger
from otpkit.common.base32 import Base32
from otpkit.common.constants import DEFAULT_KEY_LENGTH
from otpkit.common.otp import OtpEngine, format_code

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def cmd_secret(engine, args):
    key = engine.generate_random_key(args.length)
    print(Base32.encode(key))
    return EXIT_OK


def cmd_code(engine, args):
    if args.counter is None:
        code = engine.generate_totp_code(args.secret, args.modifier)
    else:
        code = engine.compute_code(args.secret, args.counter, args.modifier)
    print(format_code(code))
    return EXIT_OK


def cmd_verify(engine, args):
    if engine.validate_code(args.secret, args.code, args.modifier):
        print("valid")
        return EXIT_OK
    print("invalid")
    return EXIT_INVALID


def cmd_encode(engine, args):
    print(Base32.encode(args.text.encode("utf-8")))
    return EXIT_OK


def cmd_decode(engine, args):
    print(Base32.decode(args.text).decode("utf-8", errors="replace"))
    return EXIT_OK


def build_parser():
    parser = argparse.ArgumentParser(
        prog="otpkit",
        description="Generate and check time-based one-time codes",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--audit-log", help="append validation results to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("secret", help="print a new random secret as Base32")
    p.add_argument("--length", type=int, default=DEFAULT_KEY_LENGTH, help="secret size in bytes")
    p.set_defaults(func=cmd_secret)

    p = sub.add_parser("code", help="print the code for a Base32 secret")
    p.add_argument("secret")
    p.add_argument("--modifier", help="context string bound into the code")
    p.add_argument("--counter", type=int, help="use this counter instead of the current time step")
    p.set_defaults(func=cmd_code)

    p = sub.add_parser("verify", help="check a code against a Base32 secret")
    p.add_argument("secret")
    p.add_argument("code")
    p.add_argument("--modifier", help="context string the code was bound to")
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("encode", help="encode UTF-8 text as Base32")
    p.add_argument("text")
    p.set_defaults(func=cmd_encode)

    p = sub.add_parser("decode", help="decode Base32 to UTF-8 text")
    p.add_argument("text")
    p.set_defaults(func=cmd_decode)

    return parser


def main(argv=None, engine=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    audit = AuditLogger(args.audit_log) if args.audit_log else None
    if engine is None:
        engine = OtpEngine(audit=audit)
    elif audit is not None:
        engine = OtpEngine(engine.clock, engine.prng, engine.hmac_factory, audit)

    try:
        return args.func(engine, args)
    except (ValueError, OverflowError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    finally:
        if audit is not None:
            audit.close()


if __name__ == "__main__":
    sys.exit(main())
