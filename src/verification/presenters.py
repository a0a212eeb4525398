def verification_to_dto(result) -> dict:
    """Short answer for the public verify endpoint."""
    return {
        "cert_id": result.cert_id,
        "exists": result.exists,
        "valid": result.valid,
        "revoked": result.revoked,
        "has_content_hash": bool(result.content_hash),
        "content_hash": result.content_hash,
    }


def certificate_to_detail_dto(result) -> dict:
    return {
        **verification_to_dto(result),
        "name": result.name,
        "student_id": result.student_id,
        "father": result.father,
        "mother": result.mother,
        "degree": result.degree,
        "department": result.department,
        "degree_index": result.degree_index,
        "department_index": result.department_index,
        "cgpa": result.cgpa,
        "session": result.session,
        "created_at": result.created_at,
        "institute": {
            "address": result.institute_address,
            "name": result.institute_name,
            "acronym": result.institute_acronym,
            "link": result.institute_link,
        },
    }
