"""SkillBridge marketplace persistence service."""
