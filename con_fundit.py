I = importlib

implementation = Variable()
metadata = Hash()

# What every FundIt implementation has to export
logic_interface = [
    I.Func('create_campaign', args=('caller', 'title', 'description', 'target', 'duration', 'image')),
    I.Func('donate', args=('caller', 'campaign_id', 'amount')),
    I.Func('end_campaign', args=('caller', 'campaign_id')),
    I.Func('withdraw_funds', args=('caller', 'campaign_id')),
    I.Func('get_campaign', args=('campaign_id',)),
    I.Func('get_donors', args=('campaign_id',)),
    I.Func('get_donation', args=('campaign_id', 'index')),
]

Upgraded = LogEvent(
    event="upgraded",
    params={
        "previous_implementation": {'type':str, 'idx':True},
        "implementation": {'type':str, 'idx':True}
    })

@construct
def seed():
    metadata['operator'] = ctx.caller
    metadata['gate'] = 'con_fundit_gate'
    implementation.set('con_fundit_logic')

@export
def change_metadata(key: str, value: Any):
    assert ctx.caller == metadata['operator'], 'Only operator can set metadata!'
    metadata[key] = value

@export
def upgrade_to(new_implementation: str):
    I.import_module(metadata['gate']).require_owner(account=ctx.caller)
    previous = implementation.get()
    assert new_implementation != previous, 'Implementation is already installed'
    assert I.enforce_interface(I.import_module(new_implementation), logic_interface), \
        'implementation does not provide the FundIt interface'
    implementation.set(new_implementation)
    Upgraded({"previous_implementation": previous, "implementation": new_implementation})

@export
def get_implementation():
    return implementation.get()

def logic():
    return I.import_module(implementation.get())

@export
def create_campaign(title: str, description: str, target: float, duration: int, image: str):
    return logic().create_campaign(
        caller=ctx.caller,
        title=title,
        description=description,
        target=target,
        duration=duration,
        image=image
    )

@export
def donate(campaign_id: int, amount: float):
    return logic().donate(caller=ctx.caller, campaign_id=campaign_id, amount=amount)

@export
def end_campaign(campaign_id: int):
    logic().end_campaign(caller=ctx.caller, campaign_id=campaign_id)

@export
def withdraw_funds(campaign_id: int):
    return logic().withdraw_funds(caller=ctx.caller, campaign_id=campaign_id)

@export
def get_campaign(campaign_id: int):
    return logic().get_campaign(campaign_id=campaign_id)

@export
def get_campaigns():
    return logic().get_campaigns()

@export
def get_donors(campaign_id: int):
    return logic().get_donors(campaign_id=campaign_id)

@export
def get_donation(campaign_id: int, index: int):
    return logic().get_donation(campaign_id=campaign_id, index=index)

@export
def get_active_campaigns():
    return logic().get_active_campaigns()

@export
def get_ended_campaigns():
    return logic().get_ended_campaigns()

@export
def number_of_campaigns():
    return logic().number_of_campaigns()

@export
def version():
    return logic().version()
