"""
Command line lookup of droplets by tag.

    python -m do_datasource -t web
    python -m do_datasource -t web -c datasource.toml -o droplets.json

The API token is read from DIGITALOCEAN_TOKEN (a .env file in cwd is honoured).
"""

import argparse
import json
import sys
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger

from .configs import load_config
from .datasources import data_source_digitalocean_droplets
from .digitalocean import DigitalOceanClient
from .errors import DataSourceError
from .schema import ResourceData
from .utils.logger import configure_logger


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="List DigitalOcean droplets carrying a tag")
    parser.add_argument("-t", "--tag", type=str, required=True, help="Tag associated to the droplets")
    parser.add_argument("-c", "--config", type=str, default=None, help="TOML configuration file with a [digitalocean] table")
    parser.add_argument("-o", "--output", type=str, default=None, help="Write the result to this JSON file instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    args = parser.parse_args(argv)

    configure_logger(args.verbose)

    resource = data_source_digitalocean_droplets()
    inputs = {"tag": args.tag}

    errors = resource.validate(inputs)
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    try:
        config = load_config(args.config)
        client = DigitalOceanClient.load_from_env(config.digitalocean)
        d = ResourceData(resource, inputs)
        resource.read(d, client)
    except DataSourceError as e:
        logger.error(f"Lookup failed: {e}")
        return 1

    result = json.dumps(d.state(), indent=2)
    if args.output:
        with open(args.output, "w") as f:
            f.write(result + "\n")
        logger.success(f"Results saved to {args.output}")
    else:
        print(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
