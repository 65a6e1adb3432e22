I = importlib

metadata = Hash()

# Events
CampaignCreated = LogEvent(
    event="campaign_created",
    params={
        "id": {'type':int, 'idx':True},
        "owner": {'type':str, 'idx':True}
    })

Donated = LogEvent(
    event="donated",
    params={
        "campaign_id": {'type':int, 'idx':True},
        "donor": {'type':str, 'idx':True},
        "amount": {'type':(int, float, decimal), 'idx':False}
    })

CampaignEnded = LogEvent(
    event="campaign_ended",
    params={
        "campaign_id": {'type':int, 'idx':True},
        "owner": {'type':str, 'idx':True}
    })

FundsWithdrawn = LogEvent(
    event="funds_withdrawn",
    params={
        "campaign_id": {'type':int, 'idx':True},
        "owner": {'type':str, 'idx':True},
        "amount": {'type':(int, float, decimal), 'idx':False}
    })

@construct
def seed():
    metadata['operator'] = ctx.caller
    metadata['entry_point'] = 'con_fundit'
    metadata['ledger'] = 'con_fundit_ledger'
    metadata['gate'] = 'con_fundit_gate'
    metadata['withdrawals_pausable'] = False
    metadata['version'] = 1

@export
def change_metadata(key: str, value: Any):
    assert ctx.caller == metadata['operator'], 'Only operator can set metadata!'
    metadata[key] = value

def require_entry_point():
    # caller identities are passed in as arguments, so they are only trusted from the entry point
    assert ctx.caller == metadata['entry_point'], 'Calls must go through the entry point'

def require_not_paused():
    I.import_module(metadata['gate']).require_not_paused()

@export
def create_campaign(caller: str, title: str, description: str, target: float, duration: int, image: str):
    require_entry_point()
    require_not_paused()

    ledger = I.import_module(metadata['ledger'])
    campaign_id = ledger.create_campaign(
        campaign_owner=caller,
        title=title,
        description=description,
        target=target,
        duration=duration,
        image=image
    )

    CampaignCreated({"id": campaign_id, "owner": caller})
    return campaign_id

@export
def donate(caller: str, campaign_id: int, amount: float):
    require_entry_point()
    require_not_paused()

    ledger = I.import_module(metadata['ledger'])
    amount_collected = ledger.record_donation(campaign_id=campaign_id, donor=caller, amount=amount)

    Donated({"campaign_id": campaign_id, "donor": caller, "amount": amount})
    return amount_collected

@export
def end_campaign(caller: str, campaign_id: int):
    require_entry_point()
    require_not_paused()

    ledger = I.import_module(metadata['ledger'])
    campaign = ledger.get_campaign(campaign_id=campaign_id)
    assert campaign["active"], 'Campaign is not active'
    # Donated campaigns settle through withdraw_funds, whoever asks
    assert campaign["amount_collected"] == decimal("0.0"), 'Cannot end a campaign that has collected funds'
    assert caller == campaign["owner"], 'Only the campaign owner can end the campaign'

    ledger.close_campaign(campaign_id=campaign_id)
    CampaignEnded({"campaign_id": campaign_id, "owner": caller})

@export
def withdraw_funds(caller: str, campaign_id: int):
    require_entry_point()
    if metadata['withdrawals_pausable']:
        require_not_paused()

    ledger = I.import_module(metadata['ledger'])
    campaign = ledger.get_campaign(campaign_id=campaign_id)
    assert caller == campaign["owner"], 'Only the campaign owner can withdraw funds'
    assert now >= campaign["deadline"], 'Cannot withdraw funds before the deadline'
    assert not campaign["withdrawn"], 'Funds already withdrawn'
    assert campaign["active"], 'Campaign is not active'

    amount = ledger.release_funds(campaign_id=campaign_id, recipient=caller)
    FundsWithdrawn({"campaign_id": campaign_id, "owner": caller, "amount": amount})
    return amount

# --- Views, served straight from the ledger ---
@export
def get_campaign(campaign_id: int):
    return I.import_module(metadata['ledger']).get_campaign(campaign_id=campaign_id)

@export
def get_campaigns():
    return I.import_module(metadata['ledger']).get_campaigns()

@export
def get_donors(campaign_id: int):
    return I.import_module(metadata['ledger']).get_donors(campaign_id=campaign_id)

@export
def get_donation(campaign_id: int, index: int):
    return I.import_module(metadata['ledger']).get_donation(campaign_id=campaign_id, index=index)

@export
def get_active_campaigns():
    return I.import_module(metadata['ledger']).get_active_campaigns()

@export
def get_ended_campaigns():
    return I.import_module(metadata['ledger']).get_ended_campaigns()

@export
def number_of_campaigns():
    return I.import_module(metadata['ledger']).number_of_campaigns()

@export
def version():
    return metadata['version']
