import argparse
import logging
import sys

from SockHTTP import (ClientConfig, HTTPClientError, create_sync_client,
                      global_shutdown, global_startup)


def _parse_pairs(values, separator, what):
    """Split 'name<sep>value' arguments into an ordered list of pairs."""
    pairs = []
    for value in values or []:
        if separator not in value:
            raise argparse.ArgumentTypeError(f"{what} '{value}' must look like name{separator}value")
        name, rest = value.split(separator, 1)
        pairs.append((name.strip(), rest.strip()))
    return pairs


def build_parser():
    parser = argparse.ArgumentParser(description="Send one HTTP/1.1 request over a plain TCP socket.")
    parser.add_argument("host")
    parser.add_argument("path", nargs="?", default="/")
    parser.add_argument("-p", "--port", type=int, default=80)
    parser.add_argument("-X", "--method", default="GET")
    parser.add_argument("-d", "--data", default="", help="request body")
    parser.add_argument("-t", "--content-type", default="text/plain")
    parser.add_argument("-H", "--header", action="append", help="extra header, name:value")
    parser.add_argument("-q", "--query", action="append", help="query parameter, key=value")
    parser.add_argument("-A", "--user-agent", default="SockHTTP/0.1.0")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def print_response(response, out=sys.stdout):
    out.write(f"{response.protocol_version} {response.status_code} {response.status_text}\n")
    for name, value in response.headers.items():
        out.write(f"{name}: {value}\n")
    for name, value in response.cookies.items():
        out.write(f"[cookie] {name}={value}\n")
    out.write("\n")
    out.write(response.text)
    out.write("\n")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )

    try:
        headers = dict(_parse_pairs(args.header, ":", "Header"))
        query = _parse_pairs(args.query, "=", "Query parameter")
        config = ClientConfig(host=args.host, port=args.port, user_agent=args.user_agent)
    except (argparse.ArgumentTypeError, ValueError) as e:
        parser.error(str(e))

    try:
        global_startup()
    except HTTPClientError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        with create_sync_client(config) as client:
            response = client.request(args.method.upper(), args.path, query,
                                      args.data, args.content_type, headers)
        print_response(response)
        return 0
    except HTTPClientError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        global_shutdown()


if __name__ == '__main__':
    sys.exit(main())
