"""MJML templates for transactional email"""

THEME = {
    "background": "#f4f6f8",
    "primary": "#007bff",
    "text_primary": "#1f2933",
    "text_muted": "#6b7280",
    "code_background": "#f8f9fa",
}


def payment_otp_template(otp: str, expiry_minutes: int) -> str:
    """Payment verification OTP MJML template"""
    return f"""
    <mjml>
      <mj-head>
        <mj-title>Payment Verification OTP</mj-title>
        <mj-preview>Your payment verification code is {otp}</mj-preview>
        <mj-attributes>
          <mj-all font-family="Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_primary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="32px 40px">
          <mj-column>
            <mj-text font-size="22px" font-weight="600">Payment Verification OTP</mj-text>
            <mj-text>Your OTP for payment verification is:</mj-text>
            <mj-text align="center" font-size="32px" letter-spacing="5px"
                     color="{THEME['primary']}" container-background-color="{THEME['code_background']}"
                     padding="20px">
              {otp}
            </mj-text>
            <mj-text>This OTP will expire in {expiry_minutes} minutes.</mj-text>
            <mj-text color="{THEME['text_muted']}" font-size="14px">
              If you didn't request this OTP, please ignore this email.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """
