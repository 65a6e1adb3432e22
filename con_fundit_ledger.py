I = importlib

campaigns = Hash() # id -> campaign record, ids are dense from 0
donations = Hash() # (campaign id, index) -> {"donor": ..., "amount": ...}
campaign_count = Variable()
metadata = Hash()

# Held while the ledger talks to the currency contract
reentrancyGuardActive = Variable(default_value=False)

# Standard XSC001 (Fungible Token) interface
token_interface = [
    I.Func('transfer_from', args=('amount', 'to', 'main_account')),
    I.Func('transfer', args=('amount', 'to')),
    I.Func('balance_of', args=('address',)),
]

# Campaign fields added after the first record layout, with the value older records read as
campaign_defaults = {
    "image": "",
    "donation_count": 0,
    "withdrawn": False,
}

@construct
def seed():
    metadata['operator'] = ctx.caller
    metadata['entry_point'] = 'con_fundit'
    metadata['currency'] = 'currency'
    metadata['max_duration'] = 180 * 24 * 60 * 60 # seconds
    metadata['description_length'] = 500
    campaign_count.set(0)
    reentrancyGuardActive.set(False)

@export
def change_metadata(key: str, value: Any):
    assert not reentrancyGuardActive.get(), "Ledger is busy, cannot change metadata now."
    assert ctx.caller == metadata['operator'], 'Only operator can set metadata!'
    if key == 'currency':
        assert I.enforce_interface(I.import_module(value), token_interface), 'currency contract not XSC001-compliant'
    metadata[key] = value

def require_implementation():
    entry_point = ForeignVariable(foreign_contract=metadata['entry_point'], foreign_name='implementation')
    assert ctx.caller == entry_point.get(), 'Only the current implementation can modify the ledger'

def load_campaign(campaign_id: int):
    campaign = campaigns[campaign_id]
    # Records written before a field existed read it with its default
    for key, value in campaign_defaults.items():
        if key not in campaign:
            campaign[key] = value
    return campaign

def campaign_or_fail(campaign_id: int):
    assert campaign_id >= 0 and campaign_id < campaign_count.get(), 'Campaign does not exist'
    return load_campaign(campaign_id)

@export
def create_campaign(campaign_owner: str, title: str, description: str, target: float, duration: int, image: str):
    require_implementation()
    assert target > decimal("0.0"), 'Campaign target must be greater than 0'
    assert duration > 0, 'Campaign duration must be greater than 0'
    assert duration <= metadata['max_duration'], 'Campaign duration exceeds maximum limit'
    assert len(title) > 0, 'Campaign title must not be empty'
    assert len(description) <= metadata['description_length'], 'Campaign description too long'

    campaign_id = campaign_count.get()
    campaigns[campaign_id] = {
        "id": campaign_id,
        "owner": campaign_owner,
        "title": title,
        "description": description,
        "target": target,
        "created": now,
        "deadline": now + datetime.SECONDS * duration,
        "amount_collected": decimal("0.0"),
        "donation_count": 0,
        "image": image,
        "active": True,
        "withdrawn": False
    }
    campaign_count.set(campaign_id + 1)
    return campaign_id

@export
def record_donation(campaign_id: int, donor: str, amount: float):
    require_implementation()
    assert not reentrancyGuardActive.get(), "Ledger is busy, please try again."
    reentrancyGuardActive.set(True)

    campaign = campaign_or_fail(campaign_id)
    assert campaign["active"], 'Campaign is not active'
    assert now < campaign["deadline"], 'Campaign has ended'
    assert amount > decimal("0.0"), 'Donation amount must be greater than 0'

    currency = I.import_module(metadata['currency'])

    balance_before_transfer = currency.balance_of(address=ctx.this)
    if balance_before_transfer is None:
        balance_before_transfer = decimal("0.0")

    currency.transfer_from(amount=amount, to=ctx.this, main_account=donor)

    balance_after_transfer = currency.balance_of(address=ctx.this)
    if balance_after_transfer is None:
        balance_after_transfer = decimal("0.0")

    # Payouts assume the ledger holds every recorded amount
    assert balance_after_transfer - balance_before_transfer == amount, \
        'Currency delivered less than the donated amount'

    index = campaign["donation_count"]
    donations[campaign_id, index] = {"donor": donor, "amount": amount}
    campaign["donation_count"] = index + 1
    campaign["amount_collected"] += amount
    campaigns[campaign_id] = campaign

    reentrancyGuardActive.set(False)
    return campaign["amount_collected"]

@export
def close_campaign(campaign_id: int):
    require_implementation()
    campaign = campaign_or_fail(campaign_id)
    assert campaign["active"], 'Campaign is not active'
    campaign["active"] = False
    campaigns[campaign_id] = campaign

@export
def release_funds(campaign_id: int, recipient: str):
    require_implementation()
    assert not reentrancyGuardActive.get(), "Ledger is busy, please try again."
    reentrancyGuardActive.set(True)

    campaign = campaign_or_fail(campaign_id)
    assert not campaign["withdrawn"], 'Funds already withdrawn'

    amount = campaign["amount_collected"]
    campaign["withdrawn"] = True
    campaign["active"] = False
    campaigns[campaign_id] = campaign

    if amount > decimal("0.0"):
        currency = I.import_module(metadata['currency'])
        currency.transfer(amount=amount, to=recipient)

    reentrancyGuardActive.set(False)
    return amount

# --- View functions ---
@export
def get_campaign(campaign_id: int):
    return campaign_or_fail(campaign_id)

@export
def get_campaigns():
    result = []
    for campaign_id in range(campaign_count.get()):
        result.append(load_campaign(campaign_id))
    return result

@export
def get_donors(campaign_id: int):
    campaign = campaign_or_fail(campaign_id)
    donors = []
    amounts = []
    for index in range(campaign["donation_count"]):
        donation = donations[campaign_id, index]
        donors.append(donation["donor"])
        amounts.append(donation["amount"])
    return [donors, amounts]

@export
def get_donation(campaign_id: int, index: int):
    campaign = campaign_or_fail(campaign_id)
    assert index >= 0 and index < campaign["donation_count"], 'Donation does not exist'
    donation = donations[campaign_id, index]
    return {"campaign_id": campaign_id, "donor": donation["donor"], "amount": donation["amount"]}

@export
def get_active_campaigns():
    result = []
    for campaign_id in range(campaign_count.get()):
        campaign = load_campaign(campaign_id)
        if campaign["active"]:
            result.append(campaign)
    return result

@export
def get_ended_campaigns():
    result = []
    for campaign_id in range(campaign_count.get()):
        campaign = load_campaign(campaign_id)
        if not campaign["active"]:
            result.append(campaign)
    return result

@export
def number_of_campaigns():
    return campaign_count.get()
