#!/usr/bin/env python3
"""Route a device through a Keenetic routing policy, or back to the default.

Usage:
    python set_device_policy.py AA:BB:CC:DD:EE:FF Policy0
    python set_device_policy.py AA:BB:CC:DD:EE:FF ""
"""

import os
import sys
from dotenv import load_dotenv

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mcp_keenetic_router import ClientConfig, KeeneticClient, RouterError

load_dotenv()

def main():
    # Parse command line arguments
    if len(sys.argv) < 3:
        print("Usage: python set_device_policy.py <mac> <policy_id>")
        print()
        print("Arguments:")
        print("  mac       - Device MAC address")
        print("  policy_id - Policy id (e.g., Policy0), or \"\" for the default route")
        return

    mac = sys.argv[1]
    policy_id = sys.argv[2]

    config = ClientConfig.from_env()

    if not config.password:
        print("Error: KEENETIC_PASSWORD not set")
        return

    print(f"Connecting to router at {config.host}...")

    with KeeneticClient(config) as client:
        try:
            device = client.devices.find(mac)
            if policy_id:
                policy = client.policies.find(policy_id)
                print(f"\nAssigning {device.name or device.mac} to policy '{policy.name}'")
                print(f"  Interfaces: {', '.join(policy.interfaces) or 'none'}")
            else:
                print(f"\nRemoving policy from {device.name or device.mac}")

            client.devices.update(mac, policy=policy_id)
        except RouterError as e:
            print(f"\n✗ Failed: {e}")
            return

        # Verify the assignment
        assigned = client.policies.device_assignments().get(mac.lower())
        if assigned == (policy_id or None):
            print("\n✓ Policy updated successfully!")
        else:
            print(f"\n✗ Router reports policy {assigned!r}")

if __name__ == "__main__":
    main()
