# The registry of rules config
RULES_CONFIG_REGISTRY = {}

# The registry of rules class
RULES_REGISTRY = {}

# The registry of environment class
ENVIRONMENT_REGISTRY = {}

def register_rules_config(kind: str):
    def deco(cls):
        RULES_CONFIG_REGISTRY[kind] = cls
        return cls
    return deco

def register_rules(kind: str):
    def deco(cls):
        RULES_REGISTRY[kind] = cls
        return cls
    return deco

def register_environment(kind: str):
    def deco(cls):
        ENVIRONMENT_REGISTRY[kind] = cls
        return cls
    return deco
