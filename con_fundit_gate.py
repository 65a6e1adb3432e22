contract_owner = Variable()
paused = Variable()

Paused = LogEvent(
    event="paused",
    params={
        "account": {'type':str, 'idx':True}
    })

Unpaused = LogEvent(
    event="unpaused",
    params={
        "account": {'type':str, 'idx':True}
    })

OwnershipTransferred = LogEvent(
    event="ownership_transferred",
    params={
        "previous_owner": {'type':str, 'idx':True},
        "new_owner": {'type':str, 'idx':True}
    })

@construct
def seed():
    contract_owner.set(ctx.caller)
    paused.set(False)

@export
def pause():
    assert ctx.caller == contract_owner.get(), 'Only the owner can pause'
    assert not paused.get(), 'Contract is already paused'
    paused.set(True)
    Paused({"account": ctx.caller})

@export
def unpause():
    assert ctx.caller == contract_owner.get(), 'Only the owner can unpause'
    assert paused.get(), 'Contract is not paused'
    paused.set(False)
    Unpaused({"account": ctx.caller})

@export
def transfer_ownership(new_owner: str):
    assert ctx.caller == contract_owner.get(), 'Only the owner can transfer ownership'
    assert new_owner, 'New owner must not be empty'
    contract_owner.set(new_owner)
    OwnershipTransferred({"previous_owner": ctx.caller, "new_owner": new_owner})

# Guards consulted by the other FundIt contracts. Both only assert, so calling
# them from outside changes nothing.
@export
def require_not_paused():
    assert not paused.get(), 'Contract is paused'

@export
def require_owner(account: str):
    assert account == contract_owner.get(), 'Only the contract owner can do this'

@export
def is_paused():
    return paused.get()

@export
def get_owner():
    return contract_owner.get()
