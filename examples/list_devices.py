#!/usr/bin/env python3
"""List devices registered on a Keenetic router with their routing policy."""

import os
import json
from dotenv import load_dotenv

# Add parent directory to path for imports
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mcp_keenetic_router import ClientConfig, KeeneticClient, RouterError

# Load environment variables from .env file
load_dotenv()

def main():
    config = ClientConfig.from_env()

    if not config.password:
        print("Error: KEENETIC_PASSWORD not set in environment or .env file")
        print("Create a .env file with:")
        print("  KEENETIC_HOST=192.168.1.1")
        print("  KEENETIC_LOGIN=admin")
        print("  KEENETIC_PASSWORD=your_password")
        return

    print(f"Connecting to router at {config.host}...")

    with KeeneticClient(config) as client:
        try:
            devices = client.devices.all()
            assignments = client.policies.device_assignments()
            policies = {policy.id: policy.name for policy in client.policies.all()}
        except RouterError as e:
            print(f"Failed to read devices: {e}")
            return

        print("\nRegistered Devices:")
        print("-" * 96)

        if not devices:
            print("No devices found")
        else:
            print(f"{'MAC':<19} {'Name':<24} {'IP':<16} {'Static':<7} {'Online':<7} {'Policy':<20}")
            print("-" * 96)

            for device in devices:
                policy_id = assignments.get((device.mac or "").lower())
                print(f"{device.mac or 'N/A':<19} "
                      f"{(device.name or 'N/A')[:23]:<24} "
                      f"{device.ip or 'N/A':<16} "
                      f"{'yes' if device.static_ip else 'no':<7} "
                      f"{'yes' if device.active else 'no':<7} "
                      f"{policies.get(policy_id, policy_id) or 'default':<20}")

        # Also print as JSON for debugging
        print("\n\nRaw JSON output:")
        print(json.dumps([device.to_dict() for device in devices], indent=2))

if __name__ == "__main__":
    main()
