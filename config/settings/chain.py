from config.env import env, env_get

CHAIN_RPC_URL = env("CHAIN_RPC_URL", default="http://127.0.0.1:8545")
CHAIN_RPC_TIMEOUT = env.int("CHAIN_RPC_TIMEOUT", default=30)

INSTITUTION_CONTRACT_ADDRESS = env("INSTITUTION_CONTRACT_ADDRESS", default="")
CERTIFICATION_CONTRACT_ADDRESS = env("CERTIFICATION_CONTRACT_ADDRESS", default="")

CHAIN_GAS_LIMIT = env.int("CHAIN_GAS_LIMIT", default=500000)
# seconds; a transaction still unmined after this is reported as failed but may be mined later
CHAIN_RECEIPT_TIMEOUT = env.int("CHAIN_RECEIPT_TIMEOUT", default=600)

# Portefeuille serveur (env, sinon OpenBao KV)
CHAIN_SIGNER_PRIVATE_KEY = env_get("CHAIN_SIGNER_PRIVATE_KEY", default="")
