import asyncio

from GuerrillaMail import ClientConfig, GuerrillaMailAPI, ResponseParseError


async def main():
    # Reads GUERRILLAMAIL_* variables from the environment or a .env file
    config = ClientConfig.from_env(verbose=True)

    async with await GuerrillaMailAPI.create(config) as api:
        # =====================================================================
        # Example 1: Create a mailbox
        # =====================================================================
        email = await api.create_email("myalias")
        print(f"Email: {email}")

        # =====================================================================
        # Example 2: Poll the inbox
        # =====================================================================
        messages = await api.get_messages(email)
        for msg in messages:
            print(f"From: {msg.mail_from}, Subject: {msg.mail_subject}")

        # =====================================================================
        # Example 3: Wait for a message and read it
        # =====================================================================
        message = await api.wait_for_email(email, timeout=120, interval=5)
        if message:
            try:
                details = await api.fetch_email(email, message.mail_id)
            except ResponseParseError as e:
                print(f"✗ Could not read email: {e}")
            else:
                print(f"Body: {details.mail_body}")
                for attachment in details.attachments:
                    print(f"Attachment: {attachment.filename} ({attachment.content_type})")

        # =====================================================================
        # Example 4: Check several mailboxes concurrently on one session
        # =====================================================================
        second = await api.create_email("myalias2")
        inboxes = await asyncio.gather(
            api.get_messages(email),
            api.get_messages(second),
        )
        print(f"Inbox sizes: {[len(inbox) for inbox in inboxes]}")

        # =====================================================================
        # Example 5: Forget the mailboxes
        # =====================================================================
        for address in (email, second):
            if not await api.delete_email(address):
                print(f"✗ Service refused to forget {address}")


if __name__ == "__main__":
    asyncio.run(main())
