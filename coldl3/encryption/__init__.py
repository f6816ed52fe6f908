"""Stand-in symmetric cipher, password-based wallet encryption and the encryption engine."""