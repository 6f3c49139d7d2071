"""WowzaDeploy CLI commands"""
