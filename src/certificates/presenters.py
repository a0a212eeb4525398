def record_to_dto(record) -> dict:
    return {
        "id": str(record.id),
        "certId": record.cert_id,
        "instituteAddress": record.institute_address,
        "name": record.name,
        "studentId": record.student_id,
        "father": record.father,
        "mother": record.mother,
        "degree": record.degree,
        "department": record.department,
        "cgpa": record.cgpa,
        "session": record.session,
        "createdAt": record.issued_at,
        "status": record.status,
    }
