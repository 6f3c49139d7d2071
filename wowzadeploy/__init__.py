"""WowzaDeploy - Wowza Streaming Engine configuration deployer"""

__version__ = "1.0.0"
