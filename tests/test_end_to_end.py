"""
A customer's full journey: sign up, log in, add a pet, book and cancel.
"""
from conftest import CPF_A, PASSWORD, bearer, future_date


def test_customer_journey(client, make_service):
    service_id = make_service('Banho', 45.0, 40)

    response = client.post('/auth/register', json={
        'name': 'Ana Souza', 'cpf': CPF_A, 'email': 'ana@example.com',
        'password': PASSWORD, 'confirmPassword': PASSWORD
    })
    assert response.status_code == 201

    response = client.post('/auth/login', json={'email': 'ana@example.com', 'password': PASSWORD})
    assert response.status_code == 200
    headers = bearer(response.get_json()['token'])

    response = client.post('/pets', json={
        'name': 'Rex', 'size': 'médio', 'age': 4, 'breed': 'Labrador'
    }, headers=headers)
    assert response.status_code == 201
    pet_id = response.get_json()['pet']['id']

    response = client.post('/appointments', json={
        'petId': pet_id, 'serviceIds': [service_id], 'scheduledDate': future_date(days=3)
    }, headers=headers)
    assert response.status_code == 201
    appointment = response.get_json()['appointment']
    assert appointment['totalPrice'] == 45.0
    assert appointment['status'] == 'pendente'

    response = client.put(f"/appointments/cancel/{appointment['id']}", headers=headers)
    assert response.status_code == 200

    response = client.put(f"/appointments/cancel/{appointment['id']}", headers=headers)
    assert response.status_code == 400
