# con_reentrant_token.py
# XSC001 token that calls back into FundIt while the ledger is moving its tokens.
I = importlib

balances = Hash(default_value=decimal('0.0'))
metadata = Hash()

re_entry_owner = Variable()
re_entry_target = Variable() # FundIt entry point to call back into
re_entry_campaign_id = Variable()
re_entry_amount = Variable()
re_entry_attempt_count = Variable()
re_entry_max_attempts = Variable()

@construct
def seed():
    re_entry_attempt_count.set(0)
    re_entry_max_attempts.set(1) # Only re-enter once
    re_entry_owner.set(ctx.caller)
    metadata['total_supply'] = decimal('0.0')

def internal_approve(spender: str, amount_to_approve: float):
    balances[ctx.this, spender] = amount_to_approve # owner is ctx.this (this contract)

@export
def configure_re_entrancy(entry_point: str, ledger: str, campaign_id: int, amount: float):
    assert ctx.caller == re_entry_owner.get(), "Only owner can configure re-entrancy."
    re_entry_target.set(entry_point)
    re_entry_campaign_id.set(campaign_id)
    re_entry_amount.set(amount)
    re_entry_attempt_count.set(0)
    # The re-entrant donation is made by this contract, so it must fund it itself
    if amount > 0:
        internal_approve(spender=ledger, amount_to_approve=amount)

@export
def mint(amount: float, to: str):
    assert ctx.caller == re_entry_owner.get(), "Only owner can mint."
    assert amount > 0, "Mint amount must be positive"
    balances[to] += amount
    metadata['total_supply'] = metadata['total_supply'] + amount

@export
def transfer(amount: float, to: str):
    assert amount > 0, "Transfer amount must be positive"
    sender = ctx.caller

    sender_bal = balances[sender]
    assert sender_bal >= amount, f"Insufficient balance for sender {sender}"

    balances[sender] = sender_bal - amount
    balances[to] += amount
    return True

@export
def approve(amount: float, to: str):
    assert amount >= 0, "Approve amount must be non-negative"
    balances[ctx.caller, to] = amount
    return True

@export
def transfer_from(amount: float, to: str, main_account: str):
    assert amount > 0, "Transfer amount must be positive"
    spender = ctx.caller

    owner_balance = balances[main_account]
    assert owner_balance >= amount, f"Insufficient balance for owner {main_account}"

    spender_allowance = balances[main_account, spender]
    assert spender_allowance >= amount, f"Insufficient allowance for spender {spender} from owner {main_account}"

    balances[main_account] = owner_balance - amount
    balances[main_account, spender] = spender_allowance - amount
    balances[to] += amount

    # --- RE-ENTRANCY LOGIC ---
    current_attempts = re_entry_attempt_count.get()
    target = re_entry_target.get()

    if target and current_attempts < re_entry_max_attempts.get():
        re_entry_attempt_count.set(current_attempts + 1)
        fundit = I.import_module(target)
        # ctx.caller for the re-entrant donate is this contract
        fundit.donate(campaign_id=re_entry_campaign_id.get(), amount=re_entry_amount.get())

    return True

@export
def balance_of(address: str):
    return balances[address]
