import json
import unittest

import httpx
from fastapi.testclient import TestClient

from app.errors import GatewayError
from app.main import create_app
from app.services.payments import OrderService, PaymentVerificationService, compute_payment_signature
from app.services.quiz_service import QuizForwarder
from tests.fakes import TEST_KEY_ID, TEST_KEY_SECRET, FakeGateway, FakeNotifier, booking_payload, make_settings


class ApiTestCase(unittest.TestCase):
    settings_overrides = {}

    def setUp(self):
        self.settings = make_settings(**self.settings_overrides)
        self.app = create_app(self.settings)
        self.gateway = FakeGateway()
        self.notifier = FakeNotifier()
        self.app.state.order_service = OrderService(self.settings, self.gateway)
        self.app.state.email_service = self.notifier
        self.app.state.verification_service = PaymentVerificationService(self.settings, self.notifier)
        self.client = TestClient(self.app)


class TestRoot(ApiTestCase):
    def test_banner_lists_endpoints(self):
        res = self.client.get("/")
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertEqual(body["status"], "running")
        self.assertEqual(body["endpoints"]["createOrder"], "/api/payment/create-order")
        self.assertEqual(body["endpoints"]["verifyPayment"], "/api/payment/verify")

    def test_health_and_request_id(self):
        res = self.client.get("/health", headers={"X-Request-ID": "req-42"})
        self.assertEqual(res.json(), {"ok": True})
        self.assertEqual(res.headers["X-Request-ID"], "req-42")


class TestCreateOrder(ApiTestCase):
    def test_creates_order_in_paise(self):
        res = self.client.post("/api/payment/create-order", json={"amount": 500, "bookingData": booking_payload()})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            res.json(),
            {
                "success": True,
                "order": {"id": "order_test123", "amount": 50000, "currency": "INR"},
                "key": TEST_KEY_ID,
            },
        )
        self.assertEqual(self.gateway.calls[0]["amount"], 50000)

    def test_fractional_amount(self):
        res = self.client.post("/api/payment/create-order", json={"amount": 499.99, "bookingData": booking_payload()})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.gateway.calls[0]["amount"], 49999)

    def test_large_integer_amount_reaches_gateway_exactly(self):
        res = self.client.post(
            "/api/payment/create-order", json={"amount": 12345678901234567, "bookingData": booking_payload()}
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.gateway.calls[0]["amount"], 1234567890123456700)
        self.assertEqual(res.json()["order"]["amount"], 1234567890123456700)

    def test_string_amount_is_accepted(self):
        res = self.client.post("/api/payment/create-order", json={"amount": "250.75", "bookingData": booking_payload()})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.gateway.calls[0]["amount"], 25075)

    def test_sub_paise_amount_is_rejected(self):
        res = self.client.post("/api/payment/create-order", json={"amount": 1.005, "bookingData": booking_payload()})
        self.assertEqual(res.status_code, 400)
        self.assertFalse(res.json()["success"])
        self.assertEqual(self.gateway.calls, [])

    def test_missing_booking_field_is_rejected(self):
        payload = booking_payload()
        del payload["email"]
        res = self.client.post("/api/payment/create-order", json={"amount": 500, "bookingData": payload})

        self.assertEqual(res.status_code, 400)
        self.assertFalse(res.json()["success"])
        self.assertIn("bookingData.email", res.json()["error"])
        self.assertEqual(self.gateway.calls, [])

    def test_negative_amount_is_rejected(self):
        res = self.client.post("/api/payment/create-order", json={"amount": -1, "bookingData": booking_payload()})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(self.gateway.calls, [])

    def test_boolean_amount_is_rejected(self):
        res = self.client.post("/api/payment/create-order", json={"amount": True, "bookingData": booking_payload()})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(self.gateway.calls, [])

    def test_gateway_failure_is_generic_500(self):
        self.gateway.error = GatewayError(detail="Razorpay returned 401")
        res = self.client.post("/api/payment/create-order", json={"amount": 500, "bookingData": booking_payload()})

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"success": False, "error": "Failed to create payment order"})


class TestVerifyPayment(ApiTestCase):
    def _body(self, signature):
        return {
            "razorpay_order_id": "order_abc",
            "razorpay_payment_id": "pay_123",
            "razorpay_signature": signature,
            "bookingData": booking_payload(),
        }

    def test_valid_signature(self):
        sig = compute_payment_signature("order_abc", "pay_123", TEST_KEY_SECRET)
        res = self.client.post("/api/payment/verify", json=self._body(sig))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            res.json(),
            {
                "success": True,
                "message": "Payment verified successfully",
                "paymentId": "pay_123",
                "notificationSent": True,
            },
        )
        self.assertEqual(len(self.notifier.booking_calls), 1)
        self.assertEqual(self.notifier.booking_calls[0]["payment_id"], "pay_123")

    def test_invalid_signature(self):
        res = self.client.post("/api/payment/verify", json=self._body("0" * 64))

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json(), {"success": False, "message": "Invalid payment signature"})
        self.assertEqual(self.notifier.booking_calls, [])

    def test_email_failure_still_reports_payment(self):
        self.notifier.error = GatewayError("Failed to send email")
        sig = compute_payment_signature("order_abc", "pay_123", TEST_KEY_SECRET)
        res = self.client.post("/api/payment/verify", json=self._body(sig))

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.json()["success"])
        self.assertFalse(res.json()["notificationSent"])

    def test_unexpected_error_is_generic_500(self):
        self.notifier.error = RuntimeError("smtp exploded")
        sig = compute_payment_signature("order_abc", "pay_123", TEST_KEY_SECRET)
        res = self.client.post("/api/payment/verify", json=self._body(sig))

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"success": False, "error": "Payment verification failed"})

    def test_missing_signature_field(self):
        body = self._body("x")
        del body["razorpay_signature"]
        res = self.client.post("/api/payment/verify", json=body)
        self.assertEqual(res.status_code, 400)
        self.assertEqual(self.notifier.booking_calls, [])


class TestVerifyPaymentStrict(ApiTestCase):
    settings_overrides = {"VERIFY_REQUIRES_NOTIFICATION": True}

    def test_email_failure_fails_verification(self):
        self.notifier.error = GatewayError("Failed to send email")
        sig = compute_payment_signature("order_abc", "pay_123", TEST_KEY_SECRET)
        res = self.client.post(
            "/api/payment/verify",
            json={
                "razorpay_order_id": "order_abc",
                "razorpay_payment_id": "pay_123",
                "razorpay_signature": sig,
                "bookingData": booking_payload(),
            },
        )

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"success": False, "error": "Payment verification failed"})


class TestAssessment(ApiTestCase):
    def test_analyze_scores_and_emails(self):
        res = self.client.post(
            "/api/assessment/analyze",
            json={
                "answers": {"2": "8", "3": "Career & Purpose", "6": "3"},
                "contactInfo": {"name": "Asha", "email": "asha@example.com"},
            },
        )

        self.assertEqual(res.status_code, 200)
        analysis = res.json()["analysis"]
        self.assertEqual(analysis["overallScore"], 75)
        self.assertEqual(analysis["primaryFocus"], "Career & Purpose")
        self.assertEqual(len(analysis["recommendations"]), 4)
        self.assertEqual(len(analysis["nextSteps"]), 4)
        self.assertEqual(len(self.notifier.assessment_calls), 1)
        self.assertEqual(self.notifier.assessment_calls[0]["contact"].email, "asha@example.com")

    def test_email_failure(self):
        self.notifier.error = GatewayError("Failed to send email")
        res = self.client.post(
            "/api/assessment/analyze",
            json={"answers": {}, "contactInfo": {"name": "Asha", "email": "asha@example.com"}},
        )
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"success": False, "error": "Failed to analyze assessment"})


class TestBooking(ApiTestCase):
    def test_create_booking(self):
        res = self.client.post("/api/booking/create", json={"bookingData": booking_payload()})

        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertTrue(body["success"])
        self.assertRegex(body["bookingRef"], r"^SSW-[0-9A-Z]+$")
        self.assertEqual(body["message"], "Booking confirmed successfully")
        self.assertEqual(self.notifier.booking_calls, [])


class TestBookingWithEmail(ApiTestCase):
    settings_overrides = {"SEND_BOOKING_EMAILS": True}

    def test_sends_pay_after_session_confirmation(self):
        res = self.client.post("/api/booking/create", json={"bookingData": booking_payload()})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(self.notifier.booking_calls), 1)
        call = self.notifier.booking_calls[0]
        self.assertIsNone(call["payment_id"])
        self.assertEqual(call["booking"].booking_ref, res.json()["bookingRef"])
        self.assertEqual(call["booking"].payment_status, "Pay After Session")

    def test_email_failure_does_not_fail_booking(self):
        self.notifier.error = GatewayError("Failed to send email")
        res = self.client.post("/api/booking/create", json={"bookingData": booking_payload()})
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.json()["success"])


class TestQuiz(ApiTestCase):
    def _install_forwarder(self, handler, url="https://script.google.com/macros/s/abc/exec"):
        self.outbound = []

        def recording_handler(request):
            self.outbound.append(request)
            return handler(request)

        settings = make_settings(QUIZ_WEBHOOK_URL=url)
        self.app.state.quiz_forwarder = QuizForwarder(settings, transport=httpx.MockTransport(recording_handler))

    def test_missing_webhook_url(self):
        self._install_forwarder(lambda request: httpx.Response(200, json={"success": True}), url=None)
        res = self.client.post("/api/quiz/submit", json={"name": "Asha", "recommendedService": "Reiki"})

        self.assertEqual(res.status_code, 500)
        self.assertFalse(res.json()["success"])
        self.assertIn("configured", res.json()["error"])
        self.assertEqual(self.outbound, [])

    def test_forwards_payload_verbatim(self):
        self._install_forwarder(lambda request: httpx.Response(200, json={"success": True}))
        payload = {"name": "Asha", "answers": [1, 2, 3], "recommendedService": "Abundance Coaching"}
        res = self.client.post("/api/quiz/submit", json=payload)

        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            res.json(),
            {
                "success": True,
                "message": "Quiz response saved successfully",
                "recommendedService": "Abundance Coaching",
            },
        )
        self.assertEqual(len(self.outbound), 1)
        self.assertEqual(json.loads(self.outbound[0].content), payload)

    def test_webhook_reports_failure(self):
        self._install_forwarder(lambda request: httpx.Response(200, json={"success": False, "error": "Sheet locked"}))
        res = self.client.post("/api/quiz/submit", json={"name": "Asha"})

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"success": False, "error": "Sheet locked"})


if __name__ == "__main__":
    unittest.main()
