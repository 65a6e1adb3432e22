"""Submit and wire the FundIt contracts on a contracting client.

The four contracts find each other by name, and their seeds default to the
names used here, so a deployment only has to point the ledger at a currency.
"""

import logging
from pathlib import Path

from contracting.client import ContractingClient

log = logging.getLogger(__name__)

CONTRACTS_DIR = Path(__file__).resolve().parent

GATE = "con_fundit_gate"
LEDGER = "con_fundit_ledger"
LOGIC = "con_fundit_logic"
ENTRY_POINT = "con_fundit"
CURRENCY = "con_fund_token"

# Sources deploy reads; all of them are installed with this module
CONTRACT_SOURCES = (
    "con_fund_token.py",
    "con_fundit_ledger.py",
    "con_fundit_gate.py",
    "con_fundit_logic.py",
    "con_fundit.py",
)


def contract_code(filename):
    with open(CONTRACTS_DIR / filename) as f:
        return f.read()


def submit(client, filename, name, signer):
    client.submit(contract_code(filename), name=name, signer=signer)
    log.info("%s deployed from %s", name, filename)
    return client.get_contract(name)


def deploy_fundit(client, operator="sys", currency="currency"):
    """Deploy ledger, gate, logic and entry point signed by ``operator``.

    ``currency`` must name an already submitted XSC001 token. Returns the
    contract handles keyed by role.
    """
    log.info("Deploying FundIt with the account: %s", operator)

    contracts = {
        "ledger": submit(client, "con_fundit_ledger.py", LEDGER, operator),
        "gate": submit(client, "con_fundit_gate.py", GATE, operator),
        "logic": submit(client, "con_fundit_logic.py", LOGIC, operator),
        "entry_point": submit(client, "con_fundit.py", ENTRY_POINT, operator),
    }

    contracts["ledger"].change_metadata(key="currency", value=currency, signer=operator)
    log.info("%s holds donations in %s", LEDGER, currency)
    return contracts


def upgrade_fundit(client, name, operator="sys", version=None):
    """Install a new logic contract behind the entry point.

    The new implementation is submitted from the current logic source under
    ``name``; ledger storage is left as it is.
    """
    logic = submit(client, "con_fundit_logic.py", name, operator)
    if version is not None:
        logic.change_metadata(key="version", value=version, signer=operator)

    client.get_contract(ENTRY_POINT).upgrade_to(new_implementation=name, signer=operator)
    log.info("%s now forwards to %s", ENTRY_POINT, name)
    return logic


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    client = ContractingClient()
    client.flush()

    submit(client, "con_fund_token.py", CURRENCY, "sys")
    deploy_fundit(client, currency=CURRENCY)

    for role, name in (("currency", CURRENCY), ("ledger", LEDGER), ("gate", GATE),
                       ("logic", LOGIC), ("entry point", ENTRY_POINT)):
        print(f"{role}: {name}")


if __name__ == "__main__":
    main()
