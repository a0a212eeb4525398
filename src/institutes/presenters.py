def institute_to_dto(institute) -> dict:
    return {
        "wallet": institute.wallet,
        "name": institute.name,
        "address": institute.address,
        "acronym": institute.acronym,
        "link": institute.link,
        "degrees": list(institute.degrees),
        "departments": list(institute.departments),
    }
