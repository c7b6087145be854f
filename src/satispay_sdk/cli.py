"""
Command-line interface for Satispay Python SDK
Generates RSA keys and registers them with an activation token
"""

import argparse
import sys
from typing import Optional

from . import initialize_sdk, __version__
from .client import SatispayClient
from .config.api_config import ApiConfig, Environment
from .crypto.factory import RSAServiceFactory
from .exceptions import ApiError, SatispaySDKError, ServerCommunicationError

SEPARATOR = '-' * 60


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='satispay-keygen',
        description='Generate RSA keys from a Satispay activation token',
        epilog='Example: satispay-keygen YOUR_TOKEN --production'
    )

    parser.add_argument(
        'token',
        nargs='?',
        help='Activation token from the Satispay Business dashboard'
    )

    env_group = parser.add_mutually_exclusive_group()
    env_group.add_argument(
        '--sandbox', '-s',
        dest='sandbox',
        action='store_true',
        default=True,
        help='Use sandbox environment (default)'
    )
    env_group.add_argument(
        '--production', '-p',
        dest='sandbox',
        action='store_false',
        help='Use production environment'
    )

    parser.add_argument(
        '--generate-only',
        action='store_true',
        help='Only generate a key pair, without registering it'
    )

    parser.add_argument(
        '--check-compatibility',
        action='store_true',
        help='Check platform compatibility and exit'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Satispay Python SDK {__version__}'
    )

    return parser


def escape_newlines(value: str) -> str:
    """Put a PEM key on one line for .env files"""
    return value.replace('\n', '\\n')


def print_key_pair(public_key: str, private_key: str, key_id: Optional[str] = None):
    """Print generated credentials and matching .env lines."""
    print(SEPARATOR)
    print("Public Key:")
    print(public_key.rstrip('\n'))
    print(SEPARATOR)
    print("Private Key:")
    print(private_key.rstrip('\n'))
    print(SEPARATOR)

    if key_id is not None:
        print("Key ID:")
        print(key_id)
        print(SEPARATOR)

    print("IMPORTANT: Store these credentials securely!")
    print("   Never commit them to version control.")
    print()
    print("Environment Variables (.env):")
    print(f'SATISPAY_PUBLIC_KEY="{escape_newlines(public_key)}"')
    print(f'SATISPAY_PRIVATE_KEY="{escape_newlines(private_key)}"')
    if key_id is not None:
        print(f'SATISPAY_KEY_ID="{key_id}"')


def handle_generate_only() -> int:
    """Handle --generate-only."""
    key_pair = RSAServiceFactory.get().generate_key_pair()
    print("✓ Key pair generated (not registered)")
    print_key_pair(key_pair.public_key, key_pair.private_key)
    return 0


def handle_authenticate(token: str, sandbox: bool) -> int:
    """Exchange the activation token and print the resulting credentials."""
    environment = Environment.STAGING if sandbox else Environment.PRODUCTION

    print("Satispay Key Generator")
    print(f"Environment: {'Sandbox (Test)' if sandbox else 'Production'}")
    print(f"Token: {token[:10]}...")
    print("Generating RSA keys...")

    try:
        with SatispayClient(ApiConfig(environment=environment)) as client:
            authentication = client.authenticate_with_token(token)
    except ApiError as e:
        print(f"Error generating keys: {e}", file=sys.stderr)
        if e.http_status == 401:
            print("The activation token is invalid or has expired.", file=sys.stderr)
            print("   Generate a new token from your Satispay Business Dashboard.", file=sys.stderr)
        return 1
    except ServerCommunicationError as e:
        print(f"Error generating keys: {e}", file=sys.stderr)
        print("Network error. Please check your internet connection.", file=sys.stderr)
        return 1

    print("✓ Keys generated successfully!")
    print_key_pair(authentication.public_key, authentication.private_key, authentication.key_id)
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        if args.check_compatibility:
            result = initialize_sdk()
            if result['compatible']:
                print("✓ Platform is compatible with Satispay SDK")
                for warning in result['warnings']:
                    print(f"  Warning: {warning}")
                return 0
            else:
                print("✗ Platform is not compatible with Satispay SDK")
                for warning in result['warnings']:
                    print(f"  Error: {warning}")
                return 1

        if args.generate_only:
            return handle_generate_only()

        if not args.token:
            print("Error: Activation token is required", file=sys.stderr)
            parser.print_usage(sys.stderr)
            return 1

        return handle_authenticate(args.token, args.sandbox)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except SatispaySDKError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
