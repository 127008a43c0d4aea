"""
Storage layout of the PoS staking contract predeployed at genesis.

Source: https://github.com/0xPolygon/staking-contracts

    address[] _validators;                          // slot 0
    mapping(address => bool) _addressToIsValidator; // slot 1
    mapping(address => uint256) _addressToStakedAmount;   // slot 2
    mapping(address => uint256) _addressToValidatorIndex; // slot 3
    uint256 _stakedAmount;                          // slot 4
    uint256 _minimumNumValidators;                  // slot 5
    uint256 _maximumNumValidators;                  // slot 6
"""
from collections import namedtuple

from stakegen.utils import normalize_address, parse_hex


StakingContract = namedtuple('StakingContract', [
    'validators_slot',
    'is_validator_slot',
    'staked_amount_slot',
    'validator_index_slot',
    'total_staked_slot',
    'min_validators_slot',
    'max_validators_slot',
    'bytecode',
    'default_stake',
    'address',
])

# 10 ETH
DEFAULT_STAKED_BALANCE = 0x8AC7230489E80000

# largest integer a JSON (javascript) consumer represents exactly
MAX_SAFE_JS_INT = 2 ** 53 - 1

MIN_VALIDATOR_COUNT = 1
MAX_VALIDATOR_COUNT = MAX_SAFE_JS_INT

STAKING_CONTRACT_ADDRESS = normalize_address('0x0000000000000000000000000000000000001001')

# runtime bytecode, solc 0.8.7
STAKING_SC_BYTECODE = parse_hex(
    '6080604052600436106100f75760003560e01c80637dceceb81161008a578063e387a7ed11610059578063e387a7ed14'
    '610381578063e804fbf6146103ac578063f90ecacc146103d7578063facd743b1461041457610165565b80637dceceb8'
    '146102c3578063af6da36e14610300578063c795c0771461032b578063ca1e78191461035657610165565b8063373d61'
    '32116100c6578063373d6132146102385780633a4b66f114610263578063714ff4251461026d5780637a6eea37146102'
    '9857610165565b806302b751991461016a578063065ae171146101a75780632367f6b5146101e45780632def66201461'
    '022157610165565b366101655761011b3373ffffffffffffffffffffffffffffffffffffffff16610451565b1561015b'
    '576040517f08c379a0000000000000000000000000000000000000000000000000000000008152600401610152906111'
    'c0565b60405180910390fd5b610163610464565b005b600080fd5b34801561017657600080fd5b506101916004803603'
    '81019061018c9190610f3e565b61062e565b60405161019e919061121b565b60405180910390f35b3480156101b35760'
    '0080fd5b506101ce60048036038101906101c99190610f3e565b610646565b6040516101db9190611145565b60405180'
    '910390f35b3480156101f057600080fd5b5061020b60048036038101906102069190610f3e565b610666565b60405161'
    '0218919061121b565b60405180910390f35b34801561022d57600080fd5b506102366106af565b005b34801561024457'
    '600080fd5b5061024d61079a565b60405161025a919061121b565b60405180910390f35b61026b6107a4565b005b3480'
    '1561027957600080fd5b5061028261080d565b60405161028f919061121b565b60405180910390f35b3480156102a457'
    '600080fd5b506102ad610817565b6040516102ba9190611200565b60405180910390f35b3480156102cf57600080fd5b'
    '506102ea60048036038101906102e59190610f3e565b610823565b6040516102f7919061121b565b60405180910390f3'
    '5b34801561030c57600080fd5b5061031561083b565b604051610322919061121b565b60405180910390f35b34801561'
    '033757600080fd5b50610340610841565b60405161034d919061121b565b60405180910390f35b348015610362576000'
    '80fd5b5061036b610847565b6040516103789190611123565b60405180910390f35b34801561038d57600080fd5b5061'
    '03966108d5565b6040516103a3919061121b565b60405180910390f35b3480156103b857600080fd5b506103c16108db'
    '565b6040516103ce919061121b565b60405180910390f35b3480156103e357600080fd5b506103fe6004803603810190'
    '6103f99190610f6b565b6108e5565b60405161040b9190611108565b60405180910390f35b34801561042057600080fd'
    '5b5061043b60048036038101906104369190610f3e565b610924565b6040516104489190611145565b60405180910390'
    'f35b600080823b905060008111915050919050565b600654600080549050106104ad576040517f08c379a00000000000'
    '000000000000000000000000000000000000000000000081526004016104a490611180565b60405180910390fd5b3460'
    '0460008282546104bf9190611280565b9250508190555034600260003373ffffffffffffffffffffffffffffffffffff'
    'ffff1673ffffffffffffffffffffffffffffffffffffffff168152602001908152602001600020600082825461051591'
    '90611280565b92505081905550600160003373ffffffffffffffffffffffffffffffffffffffff1673ffffffffffffff'
    'ffffffffffffffffffffffffff16815260200190815260200160002060009054906101000a900460ff161580156105cf'
    '5750670de0b6b3a76400006fffffffffffffffffffffffffffffffff16600260003373ffffffffffffffffffffffffff'
    'ffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081526020016000205410155b'
    '156105de576105dd3361097a565b5b3373ffffffffffffffffffffffffffffffffffffffff167f9e71bc8eea02a63969'
    'f509818f2dafb9254532904319f9dbda79b67bd34a5f3d34604051610624919061121b565b60405180910390a2565b60'
    '036020528060005260406000206000915090505481565b60016020528060005260406000206000915054906101000a90'
    '0460ff1681565b6000600260008373ffffffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffff'
    'ffffffffffffffffff168152602001908152602001600020549050919050565b6106ce3373ffffffffffffffffffffff'
    'ffffffffffffffffff16610451565b1561070e576040517f08c379a00000000000000000000000000000000000000000'
    '00000000000000008152600401610705906111c0565b60405180910390fd5b6000600260003373ffffffffffffffffff'
    'ffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff168152602001908152602001600020'
    '5411610790576040517f08c379a000000000000000000000000000000000000000000000000000000000815260040161'
    '078790611160565b60405180910390fd5b610798610a80565b565b6000600454905090565b6107c33373ffffffffffff'
    'ffffffffffffffffffffffffffff16610451565b15610803576040517f08c379a0000000000000000000000000000000'
    '0000000000000000000000000081526004016107fa906111c0565b60405180910390fd5b61080b610464565b565b6000'
    '600554905090565b670de0b6b3a764000081565b60026020528060005260406000206000915090505481565b60065481'
    '565b60055481565b606060008054806020026020016040519081016040528092919081815260200182805480156108cb'
    '57602002820191906000526020600020905b8160009054906101000a900473ffffffffffffffffffffffffffffffffff'
    'ffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019060010190808311610881575b50505050'
    '50905090565b60045481565b6000600654905090565b600081815481106108f557600080fd5b90600052602060002001'
    '6000915054906101000a900473ffffffffffffffffffffffffffffffffffffffff1681565b6000600160008373ffffff'
    'ffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff168152602001908152'
    '60200160002060009054906101000a900460ff169050919050565b60018060008373ffffffffffffffffffffffffffff'
    'ffffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081526020016000206000610100'
    '0a81548160ff021916908315150217905550600080549050600360008373ffffffffffffffffffffffffffffffffffff'
    'ffff1673ffffffffffffffffffffffffffffffffffffffff168152602001908152602001600020819055506000819080'
    '600181540180825580915050600190039060005260206000200160009091909190916101000a81548173ffffffffffff'
    'ffffffffffffffffffffffffffff021916908373ffffffffffffffffffffffffffffffffffffffff1602179055505056'
    '5b60055460008054905011610ac9576040517f08c379a000000000000000000000000000000000000000000000000000'
    '0000008152600401610ac0906111e0565b60405180910390fd5b6000600260003373ffffffffffffffffffffffffffff'
    'ffffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081526020016000205490506001'
    '60003373ffffffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681'
    '5260200190815260200160002060009054906101000a900460ff1615610b6957610b6833610c5f565b5b600060026000'
    '3373ffffffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff16815260'
    '2001908152602001600020819055508060046000828254610bc091906112d6565b925050819055503373ffffffffffff'
    'ffffffffffffffffffffffffffff166108fc829081150290604051600060405180830381858888f19350505050158015'
    '610c0d573d6000803e3d6000fd5b503373ffffffffffffffffffffffffffffffffffffffff167f0f5bb82176feb1b5e7'
    '47e28471aa92156a04d9f3ab9f45f28e2d704232b93f7582604051610c54919061121b565b60405180910390a250565b'
    '600080549050600360008373ffffffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffff'
    'ffffffffffff1681526020019081526020016000205410610ce5576040517f08c379a000000000000000000000000000'
    '0000000000000000000000000000008152600401610cdc906111a0565b60405180910390fd5b6000600360008373ffff'
    'ffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081'
    '5260200160002054905060006001600080549050610d3d91906112d6565b9050808214610e2b57600080828154811061'
    '0d5b57610d5a6113cc565b5b9060005260206000200160009054906101000a900473ffffffffffffffffffffffffffff'
    'ffffffffffff1690508060008481548110610d9d57610d9c6113cc565b5b9060005260206000200160006101000a8154'
    '8173ffffffffffffffffffffffffffffffffffffffff021916908373ffffffffffffffffffffffffffffffffffffffff'
    '16021790555082600360008373ffffffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffff'
    'ffffffffffffff16815260200190815260200160002081905550505b6000600160008573ffffffffffffffffffffffff'
    'ffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff168152602001908152602001600020600061'
    '01000a81548160ff0219169083151502179055506000600360008573ffffffffffffffffffffffffffffffffffffffff'
    '1673ffffffffffffffffffffffffffffffffffffffff168152602001908152602001600020819055506000805480610e'
    'da57610ed961139d565b5b6001900381819060005260206000200160006101000a81549073ffffffffffffffffffffff'
    'ffffffffffffffffff02191690559055505050565b600081359050610f2381611519565b92915050565b600081359050'
    '610f3881611530565b92915050565b600060208284031215610f5457610f536113fb565b5b6000610f6284828501610f'
    '14565b91505092915050565b600060208284031215610f8157610f806113fb565b5b6000610f8f84828501610f29565b'
    '91505092915050565b6000610fa48383610fb0565b60208301905092915050565b610fb98161130a565b82525050565b'
    '610fc88161130a565b82525050565b6000610fd982611246565b610fe3818561125e565b9350610fee83611236565b80'
    '60005b8381101561101f5781516110068882610f98565b975061101183611251565b925050600181019050610ff2565b'
    '5085935050505092915050565b6110358161131c565b82525050565b6000611048601d8361126f565b91506110538261'
    '1400565b602082019050919050565b600061106b60278361126f565b915061107682611429565b604082019050919050'
    '565b600061108e60128361126f565b915061109982611478565b602082019050919050565b60006110b1601a8361126f'
    '565b91506110bc826114a1565b602082019050919050565b60006110d460408361126f565b91506110df826114ca565b'
    '604082019050919050565b6110f381611328565b82525050565b61110281611364565b82525050565b60006020820190'
    '5061111d6000830184610fbf565b92915050565b6000602082019050818103600083015261113d8184610fce565b9050'
    '92915050565b600060208201905061115a600083018461102c565b92915050565b600060208201905081810360008301'
    '526111798161103b565b9050919050565b600060208201905081810360008301526111998161105e565b905091905056'
    '5b600060208201905081810360008301526111b981611081565b9050919050565b600060208201905081810360008301'
    '526111d9816110a4565b9050919050565b600060208201905081810360008301526111f9816110c7565b905091905056'
    '5b600060208201905061121560008301846110ea565b92915050565b600060208201905061123060008301846110f956'
    '5b92915050565b6000819050602082019050919050565b600081519050919050565b6000602082019050919050565b60'
    '0082825260208201905092915050565b600082825260208201905092915050565b600061128b82611364565b91506112'
    '9683611364565b9250827fffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff0382111561'
    '12cb576112ca61136e565b5b828201905092915050565b60006112e182611364565b91506112ec83611364565b925082'
    '8210156112ff576112fe61136e565b5b828203905092915050565b600061131582611344565b9050919050565b600081'
    '15159050919050565b60006fffffffffffffffffffffffffffffffff82169050919050565b600073ffffffffffffffff'
    'ffffffffffffffffffffffff82169050919050565b6000819050919050565b7f4e487b71000000000000000000000000'
    '00000000000000000000000000000000600052601160045260246000fd5b7f4e487b7100000000000000000000000000'
    '000000000000000000000000000000600052603160045260246000fd5b7f4e487b710000000000000000000000000000'
    '0000000000000000000000000000600052603260045260246000fd5b600080fd5b7f4f6e6c79207374616b6572206361'
    '6e2063616c6c2066756e6374696f6e000000600082015250565b7f56616c696461746f72207365742068617320726561'
    '636865642066756c6c206360008201527f61706163697479000000000000000000000000000000000000000000000000'
    '00602082015250565b7f696e646578206f7574206f662072616e67650000000000000000000000000000600082015250'
    '565b7f4f6e6c7920454f412063616e2063616c6c2066756e6374696f6e000000000000600082015250565b7f56616c69'
    '6461746f72732063616e2774206265206c657373207468616e20746860008201527f65206d696e696d756d2072657175'
    '697265642076616c696461746f72206e756d602082015250565b6115228161130a565b811461152d57600080fd5b5056'
    '5b61153981611364565b811461154457600080fd5b5056fea2646970667358221220531eae5ca3c156b3603476dddb61'
    '2597c51d357508806fc00ae15908bd887e1264736f6c63430008070033'
)

DEFAULT_CONTRACT = StakingContract(
    validators_slot=0,
    is_validator_slot=1,
    staked_amount_slot=2,
    validator_index_slot=3,
    total_staked_slot=4,
    min_validators_slot=5,
    max_validators_slot=6,
    bytecode=STAKING_SC_BYTECODE,
    default_stake=DEFAULT_STAKED_BALANCE,
    address=STAKING_CONTRACT_ADDRESS,
)
