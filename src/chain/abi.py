# ABI fragments for the two deployed contracts (Institution, Certification).
# Only the functions this backend calls are listed.


def _params(*pairs):
    return [{"internalType": t, "name": n, "type": t} for n, t in pairs]


def _function(name, inputs=(), outputs=(), mutability="nonpayable"):
    return {
        "inputs": _params(*inputs),
        "name": name,
        "outputs": _params(*outputs),
        "stateMutability": mutability,
        "type": "function",
    }


def _view(name, inputs=(), outputs=()):
    return _function(name, inputs, outputs, mutability="view")


INSTITUTION_ABI = [
    _function(
        "addInstitute",
        inputs=[
            ("_wallet", "address"),
            ("_name", "string"),
            ("_address", "string"),
            ("_acronym", "string"),
            ("_link", "string"),
            ("initialDegrees", "string[]"),
            ("initialDepartments", "string[]"),
        ],
    ),
    _view(
        "getInstituteData",
        outputs=[
            ("institute_name", "string"),
            ("institute_address", "string"),
            ("institute_acronym", "string"),
            ("institute_link", "string"),
            ("degrees", "string[]"),
            ("departments", "string[]"),
        ],
    ),
    _view("checkInstitutePermission", inputs=[("_wallet", "address")], outputs=[("", "bool")]),
    _view("getInstituteCount", outputs=[("", "uint256")]),
    _view("instituteAddresses", inputs=[("", "uint256")], outputs=[("", "address")]),
    _function("addDegrees", inputs=[("_degrees", "string[]")]),
    _function("updateDegree", inputs=[("_index", "uint256"), ("_name", "string")]),
    _function("removeDegree", inputs=[("_index", "uint256")]),
    _function("clearDegrees"),
    _function("addDepartments", inputs=[("_departments", "string[]")]),
    _function("updateDepartment", inputs=[("_index", "uint256"), ("_name", "string")]),
    _function("removeDepartment", inputs=[("_index", "uint256")]),
    _function("clearDepartments"),
    _function("updateInstituteName", inputs=[("_name", "string")]),
    _function("updateInstituteAddress", inputs=[("_address", "string")]),
    _function("updateInstituteAcronym", inputs=[("_acronym", "string")]),
    _function("updateInstituteLink", inputs=[("_link", "string")]),
]


CERTIFICATION_ABI = [
    _function(
        "generateCertificate",
        inputs=[
            ("_id", "string"),
            ("_candidate_name", "string"),
            ("_candidate_id", "string"),
            ("_father_name", "string"),
            ("_mother_name", "string"),
            ("_degree_index", "uint256"),
            ("_department_index", "uint256"),
            ("_cgpa", "string"),
            ("_session", "string"),
            ("_creation_date", "string"),
            ("_ipfs_hash", "string"),
        ],
    ),
    _view(
        "verifyCertificate",
        inputs=[("_id", "string")],
        outputs=[
            ("exists", "bool"),
            ("valid", "bool"),
            ("revoked", "bool"),
            ("hasIpfs", "bool"),
            ("ipfsHash", "string"),
        ],
    ),
    _view(
        "getCertificate",
        inputs=[("_id", "string")],
        outputs=[
            ("candidate_name", "string"),
            ("candidate_id", "string"),
            ("father_name", "string"),
            ("mother_name", "string"),
            ("degree_index", "uint256"),
            ("department_index", "uint256"),
            ("cgpa", "string"),
            ("session", "string"),
            ("creation_date", "string"),
            ("revoked", "bool"),
            ("ipfs_hash", "string"),
            ("issued_by", "address"),
        ],
    ),
    _function("revokeCertificate", inputs=[("_id", "string")]),
    _function("updateCertificateIpfsHash", inputs=[("_id", "string"), ("_ipfs_hash", "string")]),
]
